from .canvas import fill_rect, new_canvas, stroke_rect
from .draw_text import draw_text_centered, load_font

__all__ = [
    "draw_text_centered",
    "fill_rect",
    "load_font",
    "new_canvas",
    "stroke_rect",
]
