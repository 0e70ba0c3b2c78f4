from .layouts import base_layout, mapped_layout
from .draw import draw_mapping

__all__ = [
    "base_layout",
    "mapped_layout",
    "draw_mapping",
]
