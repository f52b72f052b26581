"""Field cleaner interface.

A field cleaner transforms one value of a row, typically to anonymise it.
Cleaners are referenced from configuration by alias with optional
colon-separated arguments, e.g. ``truncate:10`` or ``fakeemail:example.org``.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

Row = Dict[str, Any]


class FieldCleaner(ABC):
    """Transforms a single field value, given the whole row as context."""

    def prepare_args(self, args: Sequence[str]) -> Tuple[Any, ...]:
        """Convert directive arguments, raising ValueError if they are unusable."""
        return tuple(args)

    @abstractmethod
    def clean(self, value: Any, row: Row, *args: Any) -> Any:
        """Return the replacement for value."""


class FunctionCleaner(FieldCleaner):
    """Adapts a plain function ``func(value, row, *args)`` to FieldCleaner."""

    def __init__(
        self,
        func: Callable[..., Any],
        arg_types: Optional[Sequence[Callable[[str], Any]]] = None,
    ):
        self.func = func
        self.arg_types = tuple(arg_types or ())
        self._signature = inspect.signature(func)

    def prepare_args(self, args: Sequence[str]) -> Tuple[Any, ...]:
        converted = []
        for index, arg in enumerate(args):
            if index < len(self.arg_types):
                try:
                    arg = self.arg_types[index](arg)
                except (TypeError, ValueError):
                    raise ValueError(
                        f"argument {index + 1} ({arg!r}) must be "
                        f"{getattr(self.arg_types[index], '__name__', 'valid')}"
                    )
            converted.append(arg)

        try:
            self._signature.bind(None, None, *converted)
        except TypeError as e:
            raise ValueError(f"wrong number of arguments: {e}")
        return tuple(converted)

    def clean(self, value: Any, row: Row, *args: Any) -> Any:
        return self.func(value, row, *args)

    def __repr__(self) -> str:
        return f"FunctionCleaner({self.func.__name__})"
