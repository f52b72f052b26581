from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from dbsampler.errors import ConfigurationError
from dbsampler.references import ReferenceStore
from dbsampler.spec import MigrationSpec

Row = Dict[str, Any]


class BaseSampler(ABC):
    """Base class for all sampling strategies.

    A sampler selects rows for one table from its source and, as a side
    effect, remembers the column values named in the spec's 'remember' rules
    so later tables can restrict themselves to related rows.
    """

    # Identifier used in configuration, set by register_sampler
    sampler_name = "base"

    def __init__(
        self,
        spec: MigrationSpec,
        reference_store: ReferenceStore,
        source,
        table_name: str,
        strict_references: bool = False,
    ):
        self.spec = spec
        self.reference_store = reference_store
        self.source = source
        self.table_name = table_name
        self.strict_references = strict_references
        self.reference_fields = dict(spec.remember)

    @property
    def name(self) -> str:
        return self.sampler_name

    @classmethod
    def validate(cls, spec: MigrationSpec) -> None:
        """Check the spec carries everything this strategy needs.

        Raises:
            ConfigurationError: If a required parameter is missing or invalid
        """

    @classmethod
    def references(cls, spec: MigrationSpec) -> List[str]:
        """Reference names this strategy reads for the given spec."""
        return []

    @abstractmethod
    def get_rows(self) -> List[Row]:
        """Fetch the sample for this table."""

    def execute(self) -> List[Row]:
        """Fetch the sample and remember the configured column values."""
        rows = self.get_rows()

        references: Dict[str, List[Any]] = {
            variable: [] for variable in self.reference_fields.values()
        }
        for row in rows:
            for column, variable in self.reference_fields.items():
                if column not in row:
                    raise ConfigurationError(
                        f"Cannot remember column '{column}' as '{variable}': "
                        "column not present in sampled rows",
                        table=self.table_name,
                        sampler=self.name,
                    )
                references[variable].append(row[column])

        for variable, values in references.items():
            self.reference_store.remember(variable, values)

        return rows

    def demand_parameter(self, key: str) -> Any:
        """Return a required parameter from the spec."""
        return demand_parameter(self.spec, key, self.name)

    def order_by(self) -> Optional[List[str]]:
        return order_terms(self.spec)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(table={self.table_name!r})"


def demand_parameter(spec: MigrationSpec, key: str, sampler: str) -> Any:
    if spec.get(key) is None:
        raise ConfigurationError(
            f"'{key}' missing from config required by sampler '{sampler}'",
            table=spec.table,
            sampler=sampler,
        )
    return spec.get(key)


def order_terms(spec: MigrationSpec) -> Optional[List[str]]:
    """Normalise the optional 'orderBy' parameter to a list of terms."""
    order = spec.get("orderBy", spec.get("order_by"))
    if order is None:
        return None
    if isinstance(order, str):
        return [order]
    return [str(term) for term in order]


def non_negative_int(spec: MigrationSpec, key: str, sampler: str) -> int:
    value = demand_parameter(spec, key, sampler)
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = -1
    if isinstance(value, bool) or number < 0:
        raise ConfigurationError(
            f"'{key}' must be a non-negative integer, got {value!r}",
            table=spec.table,
            sampler=sampler,
        )
    return number
