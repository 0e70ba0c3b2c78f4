import sys

from graphequiv import group_by_equivalence, read_graph6_lines

# Usage: python group_graph6_file.py graphs.g6
with open(sys.argv[1]) as fh:
    graphs = list(read_graph6_lines(fh))

classes = group_by_equivalence(graphs, processes=4, verbose=True)
print(f"{len(classes)} equivalence class(es)")
for c in classes:
    print(f"{len(c):6d}  n={c.representative.n}  m={c.representative.number_of_edges()}")
