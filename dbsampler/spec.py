"""Per-table migration specifications and migration sets."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dbsampler.errors import ConfigurationError

DEFAULT_BATCH_SIZE = 500
DEFAULT_SAMPLER = "copyall"

ORDER_DEPENDENCY = "dependency"
ORDER_DECLARED = "declared"
ORDER_MODES = (ORDER_DEPENDENCY, ORDER_DECLARED)

# Keys with a meaning of their own; everything else belongs to the sampler
_REMEMBER_KEYS = ("remember",)
_CLEAN_KEYS = ("cleanFields", "clean_fields")
_POST_IMPORT_KEYS = ("postImportSql", "post_import_sql")


def _first_present(config: Dict[str, Any], keys, default=None):
    for key in keys:
        if key in config:
            return config[key]
    return default


@dataclass(frozen=True)
class MigrationSpec:
    """How one table is sampled, remembered, cleaned and written."""

    table: str
    sampler: str
    params: Dict[str, Any] = field(default_factory=dict)
    remember: Dict[str, str] = field(default_factory=dict)
    clean_fields: Dict[str, List[str]] = field(default_factory=dict)
    post_import_sql: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, table: str, config: Dict[str, Any]) -> "MigrationSpec":
        """Create a MigrationSpec from a table's configuration block.

        Args:
            table: Name of the table the block configures
            config: Mapping of sampler parameters; 'sampler' defaults to copyall

        Returns:
            MigrationSpec instance

        Raises:
            ConfigurationError: If required fields are missing or malformed
        """
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                "Table configuration must be a mapping", table=table
            )

        sampler = config.get("sampler", DEFAULT_SAMPLER)
        if not isinstance(sampler, str) or not sampler.strip():
            raise ConfigurationError(
                "'sampler' must be a non-empty sampler name", table=table
            )

        remember = _first_present(config, _REMEMBER_KEYS, {}) or {}
        if not isinstance(remember, dict):
            raise ConfigurationError(
                "'remember' must map column names to reference names", table=table
            )

        clean_fields = _parse_clean_fields(
            table, _first_present(config, _CLEAN_KEYS, {}) or {}
        )

        post_import_sql = _first_present(config, _POST_IMPORT_KEYS, []) or []
        if isinstance(post_import_sql, str):
            post_import_sql = [post_import_sql]

        reserved = set(_REMEMBER_KEYS + _CLEAN_KEYS + _POST_IMPORT_KEYS) | {"sampler"}
        params = {k: v for k, v in config.items() if k not in reserved}

        return cls(
            table=table,
            sampler=sampler.strip().lower(),
            params=params,
            remember={str(k): str(v) for k, v in remember.items()},
            clean_fields=clean_fields,
            post_import_sql=list(post_import_sql),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Return a sampler parameter."""
        return self.params.get(key, default)

    @property
    def remembered_names(self) -> List[str]:
        """Reference names this table populates."""
        return list(dict.fromkeys(self.remember.values()))


def _parse_clean_fields(table: str, raw: Any) -> Dict[str, List[str]]:
    if not isinstance(raw, dict):
        raise ConfigurationError(
            "'cleanFields' must map column names to cleaner directives", table=table
        )

    clean_fields = {}
    for column, directives in raw.items():
        if isinstance(directives, str):
            directives = [directives]
        if not isinstance(directives, list) or not all(
            isinstance(d, str) and d for d in directives
        ):
            raise ConfigurationError(
                f"Cleaner directives for column '{column}' must be a string "
                "or a list of strings",
                table=table,
            )
        clean_fields[str(column)] = list(directives)
    return clean_fields


@dataclass
class MigrationSet:
    """A named collection of table specs and views migrated in one run."""

    name: str
    tables: Dict[str, MigrationSpec] = field(default_factory=dict)
    views: List[str] = field(default_factory=list)
    order: str = ORDER_DEPENDENCY
    strict_references: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self):
        if self.order not in ORDER_MODES:
            raise ConfigurationError(
                f"Unknown table order '{self.order}', expected one of: "
                + ", ".join(ORDER_MODES)
            )
        if self.batch_size < 1:
            raise ConfigurationError("'batch_size' must be at least 1")

    @classmethod
    def from_dict(
        cls, name: str, tables: Dict[str, Dict[str, Any]], **kwargs: Any
    ) -> "MigrationSet":
        """Build a set from raw table configuration blocks, keeping their order."""
        specs = {
            table: MigrationSpec.from_dict(table, config)
            for table, config in (tables or {}).items()
        }
        return cls(name=name, tables=specs, **kwargs)

    def get_spec(self, table: str) -> Optional[MigrationSpec]:
        return self.tables.get(table)
