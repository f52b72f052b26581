from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from dbsampler.cleaners.base import FieldCleaner, Row
from dbsampler.cleaners.registry import CleanerRegistry, cleaner_registry
from dbsampler.errors import ConfigurationError
from dbsampler.spec import MigrationSpec


@dataclass(frozen=True)
class CleanerDirective:
    """One parsed 'alias:arg:arg' directive bound to its cleaner."""

    directive: str
    alias: str
    cleaner: FieldCleaner
    args: Tuple[Any, ...]

    def apply(self, value: Any, row: Row) -> Any:
        return self.cleaner.clean(value, row, *self.args)


def parse_directive(directive: str) -> Tuple[str, List[str]]:
    """Split 'alias:arg1:arg2' into ('alias', ['arg1', 'arg2'])."""
    alias, *args = directive.split(":")
    return alias.strip().lower(), args


class RowCleaner:
    """Applies a table's configured field cleaners to each row.

    Columns are processed in declaration order, and a column's directives
    left to right; each directive sees the row as cleaned so far. Directives
    are resolved against the registry when the cleaner is built, so unknown
    aliases or bad arguments fail before any row is touched.
    """

    def __init__(
        self, spec: MigrationSpec, registry: Optional[CleanerRegistry] = None
    ):
        self.spec = spec
        self.registry = registry or cleaner_registry
        self._directives: Dict[str, List[CleanerDirective]] = {
            column: [self._resolve(column, d) for d in directives]
            for column, directives in spec.clean_fields.items()
        }

    def _resolve(self, column: str, directive: str) -> CleanerDirective:
        alias, args = parse_directive(directive)
        try:
            cleaner = self.registry.get(alias)
        except ConfigurationError as e:
            raise ConfigurationError(
                f"{e.message} for column '{column}'", table=self.spec.table
            ) from e

        try:
            prepared = cleaner.prepare_args(args)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid cleaner '{directive}' for column '{column}': {e}",
                table=self.spec.table,
            ) from e

        return CleanerDirective(directive, alias, cleaner, prepared)

    @property
    def columns(self) -> List[str]:
        return list(self._directives)

    def clean_row(self, row: Row) -> Row:
        """Return a cleaned copy of row with the same keys."""
        cleaned = dict(row)
        for column, directives in self._directives.items():
            if column not in cleaned:
                raise ConfigurationError(
                    f"Cannot clean column '{column}': column not present in row",
                    table=self.spec.table,
                )
            for directive in directives:
                cleaned[column] = directive.apply(cleaned[column], cleaned)
        return cleaned
