from typing import Callable, Dict, List, Optional, Sequence

from dbsampler.cleaners.base import FieldCleaner, FunctionCleaner
from dbsampler.errors import ConfigurationError


class CleanerRegistry:
    """Registry mapping cleaner aliases to field cleaners."""

    def __init__(self):
        self._cleaners: Dict[str, FieldCleaner] = {}

    def register(self, cleaner: FieldCleaner, alias: str) -> None:
        """Register a cleaner, replacing any cleaner with the same alias."""
        if not isinstance(cleaner, FieldCleaner):
            raise TypeError(f"Cleaner for '{alias}' must be a FieldCleaner instance")
        self._cleaners[alias.lower()] = cleaner

    def get(self, alias: str) -> FieldCleaner:
        key = alias.lower()
        if key not in self._cleaners:
            raise ConfigurationError(f"Unrecognised cleaner type '{alias}' required")
        return self._cleaners[key]

    def __contains__(self, alias: str) -> bool:
        return alias.lower() in self._cleaners

    def available(self) -> List[str]:
        return sorted(self._cleaners)

    def copy(self) -> "CleanerRegistry":
        registry = CleanerRegistry()
        registry._cleaners = dict(self._cleaners)
        return registry


cleaner_registry = CleanerRegistry()


def field_cleaner(
    alias: str,
    arg_types: Optional[Sequence[Callable[[str], object]]] = None,
    registry: Optional[CleanerRegistry] = None,
):
    """Register ``func(value, row, *args)`` as a cleaner under alias.

    Example:
        @field_cleaner("upper")
        def upper(value, row):
            return value.upper() if value is not None else None
    """

    def decorator(func):
        (registry or cleaner_registry).register(FunctionCleaner(func, arg_types), alias)
        return func

    return decorator
