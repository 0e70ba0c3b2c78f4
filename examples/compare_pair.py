from graphequiv import AttributedGraph, compare, draw_mapping

# Ethanol-like heavy-atom skeletons numbered differently: C-C-O vs O-C-C
A = AttributedGraph.from_edges(3, [(0, 1), (1, 2)], ["C", "C", "O"])
B = AttributedGraph.from_edges(3, [(0, 1), (1, 2)], ["O", "C", "C"])

res = compare(A, B)
print(res.equivalent, res.mapping, res.stats)

draw_mapping(A, B, res, save_path="compare_pair.png")
