from .line_ordering import compare_lines, line_sort_key, sort_lines
from .viewport_filter import filter_by_line, filter_within_bounds, with_valid_position

__all__ = [
    "compare_lines",
    "filter_by_line",
    "filter_within_bounds",
    "line_sort_key",
    "sort_lines",
    "with_valid_position",
]
