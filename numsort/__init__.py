"""Sort strings with embedded numbers in human order."""

from .collation import (
    CodepointCollator,
    Collator,
    IcuCollator,
    SystemLocaleCollator,
    build_collator,
)
from .compare import (
    NumericStringComparator,
    Ordering,
    compare,
    get_comparator,
    natural_sort_key,
    sort_numeric,
)
from .errors import InvalidConfiguration, NumsortError
from .settings import CaseSensitivity, ComparisonConfig, load_config

__all__ = [
    "CaseSensitivity",
    "CodepointCollator",
    "Collator",
    "ComparisonConfig",
    "IcuCollator",
    "InvalidConfiguration",
    "NumericStringComparator",
    "NumsortError",
    "Ordering",
    "SystemLocaleCollator",
    "build_collator",
    "compare",
    "get_comparator",
    "load_config",
    "natural_sort_key",
    "sort_numeric",
]
