from .renderer import BLACK_GLYPH, OTHER_GLYPH, WHITE_GLYPH, glyph_for, print_buffer, render_lines, render_text

__all__ = [
    "BLACK_GLYPH",
    "glyph_for",
    "OTHER_GLYPH",
    "print_buffer",
    "render_lines",
    "render_text",
    "WHITE_GLYPH",
]
