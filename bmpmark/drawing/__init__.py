from .lines import line_points, plot_line
from .marks import MARK_SIZE, centered_origin, draw_x, mark_points

__all__ = ["centered_origin", "draw_x", "line_points", "MARK_SIZE", "mark_points", "plot_line"]
