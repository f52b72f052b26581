"""Run-scoped store of values remembered by samplers."""

from typing import Any, Dict, Iterable, List


class ReferenceStore:
    """Named, append-only value lists shared between the tables of one run.

    A sampler for a parent table remembers column values under a reference
    name; samplers for child tables look those values up to restrict their
    own rows. Values are only ever appended, in the order they were
    remembered.
    """

    def __init__(self):
        self._references: Dict[str, List[Any]] = {}

    def remember(self, name: str, values: Iterable[Any]) -> None:
        """Append values to the reference, creating it if needed."""
        self._references.setdefault(name, []).extend(values)

    def lookup(self, name: str) -> List[Any]:
        """Return every value remembered under name, or [] if never remembered."""
        return list(self._references.get(name, []))

    def has(self, name: str) -> bool:
        """Whether name has been remembered, even with no values."""
        return name in self._references

    def names(self) -> List[str]:
        return list(self._references)

    def __len__(self) -> int:
        return len(self._references)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{k}={len(v)}" for k, v in self._references.items())
        return f"ReferenceStore({sizes})"
