"""Loading and validation of migration config files.

A migration config is a YAML or JSON document::

    name: staging-sample
    source: ${SOURCE_DATABASE_URL}
    destination:
      drivername: postgresql
      host: localhost
      database: ${DEST_DB|sample}
    tables:
      customers:
        sampler: copyall
        remember: {id: customer_ids}
        cleanFields: {email: fakeemail}
      orders:
        sampler: matched
        constraints: {customer_id: $customer_ids}
    views: [active_customers]

Only the braced ``${VAR}`` form is substituted from the environment; a bare
``$name`` is a reference to remembered values and is left untouched.
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from dbsampler.cleaners import CleanerRegistry, RowCleaner, cleaner_registry
from dbsampler.errors import ConfigurationError
from dbsampler.logging import get_logger
from dbsampler.planner import plan_table_order
from dbsampler.samplers import SamplerRegistry, sampler_registry
from dbsampler.spec import (
    DEFAULT_BATCH_SIZE,
    ORDER_DEPENDENCY,
    ORDER_MODES,
    MigrationSet,
    MigrationSpec,
)
from dbsampler.utils.env import setup_environment

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".yml", ".yaml", ".json")

TOP_LEVEL_KEYS = (
    "name",
    "source",
    "destination",
    "tables",
    "views",
    "order",
    "strict_references",
    "batch_size",
)

_VARIABLE_PATTERN = re.compile(r"\$\{([^}|]+)(?:\|([^}]*))?\}")


@dataclass
class ValidationResult:
    """Outcome of validating a migration config."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


@dataclass
class MigrationConfig:
    """A loaded migration config: the set plus its connection settings."""

    migration_set: MigrationSet
    source: Any = None
    destination: Any = None
    path: Optional[str] = None


def _clean_default_value(default: str) -> str:
    default = default.strip()
    if len(default) >= 2 and default[0] == default[-1] and default[0] in "'\"":
        return default[1:-1]
    return default


def substitute_variables(text: str, variables: Mapping[str, str]) -> str:
    """Replace ``${VAR}`` and ``${VAR|default}`` placeholders.

    Placeholders with neither a value nor a default are kept as written.
    """

    def replace(match):
        var_name = match.group(1).strip()
        default = match.group(2)

        if var_name in variables:
            return str(variables[var_name])
        elif default is not None:
            return _clean_default_value(default)
        else:
            return match.group(0)

    return _VARIABLE_PATTERN.sub(replace, text)


def substitute_in_config(value: Any, variables: Mapping[str, str]) -> Any:
    """Apply substitution to every string of a parsed config, recursively."""
    if isinstance(value, str):
        return substitute_variables(value, variables)
    if isinstance(value, dict):
        return {k: substitute_in_config(v, variables) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_in_config(v, variables) for v in value]
    return value


def find_unresolved_variables(value: Any, location: str = "") -> List[str]:
    """Return 'location: ${VAR}' for every placeholder left in a config."""
    found = []
    if isinstance(value, str):
        for match in _VARIABLE_PATTERN.finditer(value):
            placeholder = match.group(0)
            found.append(f"{location}: {placeholder}" if location else placeholder)
    elif isinstance(value, dict):
        for key, item in value.items():
            child = f"{location}.{key}" if location else str(key)
            found.extend(find_unresolved_variables(item, child))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            found.extend(find_unresolved_variables(item, f"{location}[{index}]"))
    return found


def read_config_file(path: str) -> Dict[str, Any]:
    """Parse a YAML or JSON migration config.

    Raises:
        ConfigurationError: If the file is missing, unsupported or unparseable
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Migration config not found: {path}")

    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported config file type '{suffix}', expected one of: "
            + ", ".join(SUPPORTED_EXTENSIONS)
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not parse migration config {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Migration config {path} must contain a mapping at the top level"
        )
    return data


def validate_config(
    data: Dict[str, Any],
    samplers: Optional[SamplerRegistry] = None,
    cleaners: Optional[CleanerRegistry] = None,
) -> ValidationResult:
    """Check a parsed config without touching any database.

    Every problem is collected rather than stopping at the first one.
    """
    samplers = samplers or sampler_registry
    cleaners = cleaners or cleaner_registry
    result = ValidationResult()

    if not isinstance(data, dict):
        result.add_error("Migration config must be a mapping")
        return result

    for key in data:
        if key not in TOP_LEVEL_KEYS:
            result.add_warning(f"Unknown top-level key '{key}' will be ignored")

    for placeholder in find_unresolved_variables(data):
        result.add_error(f"Unresolved variable {placeholder}")

    for side in ("source", "destination"):
        value = data.get(side)
        if value is None:
            result.add_warning(
                f"No '{side}' configured; it must be given on the command line"
            )
        elif not isinstance(value, (str, dict)):
            result.add_error(
                f"'{side}' must be a URL or a mapping of connection parameters"
            )

    _validate_tables(data.get("tables"), samplers, cleaners, result)

    views = data.get("views") or []
    if not isinstance(views, list) or not all(isinstance(v, str) for v in views):
        result.add_error("'views' must be a list of view names")

    order = data.get("order", ORDER_DEPENDENCY)
    if order not in ORDER_MODES:
        result.add_error(
            f"Unknown table order '{order}', expected one of: " + ", ".join(ORDER_MODES)
        )

    if not isinstance(data.get("strict_references", False), bool):
        result.add_error("'strict_references' must be true or false")

    batch_size = data.get("batch_size", DEFAULT_BATCH_SIZE)
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        result.add_error("'batch_size' must be a positive integer")

    return result


def _validate_tables(
    tables: Any,
    samplers: SamplerRegistry,
    cleaners: CleanerRegistry,
    result: ValidationResult,
) -> None:
    if not tables:
        result.add_error("No tables configured")
        return
    if not isinstance(tables, dict):
        result.add_error("'tables' must map table names to their configuration")
        return

    for table, table_config in tables.items():
        try:
            spec = MigrationSpec.from_dict(str(table), table_config)
            samplers.validate(spec)
            RowCleaner(spec, cleaners)
        except ConfigurationError as e:
            result.add_error(str(e))


def build_migration_set(data: Dict[str, Any], default_name: str) -> MigrationSet:
    """Create a MigrationSet from a validated config mapping."""
    return MigrationSet.from_dict(
        data.get("name") or default_name,
        data.get("tables") or {},
        views=list(data.get("views") or []),
        order=data.get("order", ORDER_DEPENDENCY),
        strict_references=data.get("strict_references", False),
        batch_size=data.get("batch_size", DEFAULT_BATCH_SIZE),
    )


def load_migration_config(
    path: str,
    environ: Optional[Mapping[str, str]] = None,
    samplers: Optional[SamplerRegistry] = None,
    cleaners: Optional[CleanerRegistry] = None,
) -> MigrationConfig:
    """Read, substitute and validate a migration config file.

    Args:
        path: YAML or JSON config file
        environ: Variables for ``${VAR}`` substitution; defaults to the
            process environment after loading any .env file next to ``path``
        samplers: Registry to validate samplers against
        cleaners: Registry to validate cleaner directives against

    Returns:
        MigrationConfig with the migration set and raw connection settings

    Raises:
        ConfigurationError: Listing every validation error found
    """
    if environ is None:
        setup_environment(path)
        environ = os.environ

    data = substitute_in_config(read_config_file(path), environ)

    result = validate_config(data, samplers, cleaners)
    for warning in result.warnings:
        logger.warning(f"{path}: {warning}")
    if not result.is_valid:
        raise ConfigurationError(
            f"Invalid migration config {path}", errors=result.errors
        )

    migration_set = build_migration_set(data, Path(path).stem)
    logger.debug(
        f"Loaded migration set '{migration_set.name}' with "
        f"{len(migration_set.tables)} tables from {path}"
    )
    return MigrationConfig(
        migration_set=migration_set,
        source=data.get("source"),
        destination=data.get("destination"),
        path=str(path),
    )


def validate_config_file(
    path: str,
    environ: Optional[Mapping[str, str]] = None,
    samplers: Optional[SamplerRegistry] = None,
    cleaners: Optional[CleanerRegistry] = None,
) -> ValidationResult:
    """Validate a config file, including the table order it implies.

    Unlike load_migration_config this never raises for an invalid config;
    every problem is reported in the result.
    """
    result = ValidationResult()
    try:
        if environ is None:
            setup_environment(path)
            environ = os.environ
        data = substitute_in_config(read_config_file(path), environ)
    except ConfigurationError as e:
        result.add_error(str(e))
        return result

    result = validate_config(data, samplers, cleaners)
    if not result.is_valid:
        return result

    try:
        plan = plan_table_order(build_migration_set(data, Path(path).stem), samplers)
    except ConfigurationError as e:
        result.add_error(str(e))
        return result

    for table, references in plan.unresolved.items():
        for reference in references:
            result.add_warning(
                f"Table '{table}' reads reference '{reference}' "
                "which no other table remembers"
            )
    return result
