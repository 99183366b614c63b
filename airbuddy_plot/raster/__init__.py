from .canvas import blend, draw_dashed_vline, draw_hline, draw_pixel, draw_vline, new_canvas
from .draw_lines import draw_polyline
from .draw_markers import draw_markers
from .draw_text import draw_text, text_size

__all__ = [
    "blend",
    "draw_dashed_vline",
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "new_canvas",
    "text_size",
]
