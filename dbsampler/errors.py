"""Error hierarchy for dbsampler.

Every error carries a message and an optional context mapping which is rendered
into the final message, so operators can see which table, sampler or
reference caused a failure.
"""

from typing import Any, Dict, List, Optional


class DbSamplerError(Exception):
    """Base class for all dbsampler errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context information."""
        formatted = self.message

        context_parts = []
        for key, value in self.context.items():
            if isinstance(value, (list, tuple)) and len(value) > 0:
                context_parts.append(f"{key}: {', '.join(map(str, value))}")
            elif value not in (None, "", [], ()):
                context_parts.append(f"{key}: {value}")

        if context_parts:
            formatted += " (" + "; ".join(context_parts) + ")"

        return formatted


class ConfigurationError(DbSamplerError):
    """Invalid or incomplete migration configuration."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        sampler: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ):
        self.table = table
        self.sampler = sampler
        self.errors = errors or []
        super().__init__(
            message, {"table": table, "sampler": sampler, "errors": self.errors}
        )


class UnknownReferenceError(ConfigurationError):
    """A sampler reads a reference that no table remembers."""

    def __init__(
        self,
        reference: str,
        table: Optional[str] = None,
        sampler: Optional[str] = None,
    ):
        self.reference = reference
        super().__init__(
            f"Reference '{reference}' has not been remembered by any table",
            table=table,
            sampler=sampler,
        )


class DependencyCycleError(ConfigurationError):
    """Tables reference each other's remembered values in a loop."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        path = " -> ".join(cycle + cycle[:1])
        super().__init__(f"Circular table dependency detected: {path}")


class DialectMismatchError(DbSamplerError):
    """Source and destination do not use the same database dialect."""

    def __init__(self, source_dialect: str, destination_dialect: str):
        self.source_dialect = source_dialect
        self.destination_dialect = destination_dialect
        super().__init__(
            "Source and destination must use the same driver",
            {"source": source_dialect, "destination": destination_dialect},
        )


class TableMigrationError(DbSamplerError):
    """Sampling, cleaning or writing a table failed."""

    def __init__(self, table: str, sampler: Optional[str], error: Exception):
        self.table = table
        self.sampler = sampler
        self.error = error
        super().__init__(
            f"Failed to migrate table '{table}': {error}",
            {"sampler": sampler},
        )


class ViewMigrationError(DbSamplerError):
    """Recreating a view on the destination failed."""

    def __init__(self, view: str, error: Exception):
        self.view = view
        self.error = error
        super().__init__(f"Failed to migrate view '{view}': {error}")
