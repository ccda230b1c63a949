"""In-place order-statistic selection and expected linear-time median."""

from .errors import InvalidArgumentError  # noqa: F401
from .logging_config import configure_logging  # noqa: F401
from .selection.quick_select import (  # noqa: F401
    DEFAULT_MEDIAN_OF_THREE_THRESHOLD,
    DEFAULT_PIVOT_METHOD,
    DEFAULT_SORT_ORDER,
    PivotMethod,
    QuickSelect,
    SelectionBounds,
    SortOrder,
)
from .statistics.quick_median import QuickMedian, average  # noqa: F401
from .statistics.sorting_median import SortingMedian  # noqa: F401

__all__ = [
    "DEFAULT_MEDIAN_OF_THREE_THRESHOLD",
    "DEFAULT_PIVOT_METHOD",
    "DEFAULT_SORT_ORDER",
    "InvalidArgumentError",
    "PivotMethod",
    "QuickMedian",
    "QuickSelect",
    "SelectionBounds",
    "SortOrder",
    "SortingMedian",
    "average",
    "configure_logging",
]
