"""dbsampler - copy a sampled, reference-consistent, cleaned database subset."""

__version__ = "0.1.0"
__package_name__ = "dbsampler"

from .errors import (
    ConfigurationError,
    DbSamplerError,
    DependencyCycleError,
    DialectMismatchError,
    TableMigrationError,
    UnknownReferenceError,
    ViewMigrationError,
)
from .migrator import MigrationResult, Migrator
from .references import ReferenceStore
from .spec import MigrationSet, MigrationSpec

__all__ = [
    "ConfigurationError",
    "DbSamplerError",
    "DependencyCycleError",
    "DialectMismatchError",
    "MigrationResult",
    "MigrationSet",
    "MigrationSpec",
    "Migrator",
    "ReferenceStore",
    "TableMigrationError",
    "UnknownReferenceError",
    "ViewMigrationError",
]
