from .refinement import (
    neighborhood_descriptors,
    refine_graph,
    color_classes,
)

__all__ = [
    "neighborhood_descriptors",
    "refine_graph",
    "color_classes",
]
