"""Migration orchestrator - runs every table, view and trigger of a set."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dbsampler.cleaners import CleanerRegistry, FieldCleaner, RowCleaner, cleaner_registry
from dbsampler.database import DestinationDatabase, SourceDatabase
from dbsampler.errors import (
    DialectMismatchError,
    TableMigrationError,
    ViewMigrationError,
)
from dbsampler.logging import get_logger
from dbsampler.planner import TablePlan, plan_table_order
from dbsampler.references import ReferenceStore
from dbsampler.samplers import BaseSampler, SamplerRegistry, sampler_registry
from dbsampler.spec import MigrationSet, MigrationSpec
from dbsampler.writer import Writer

logger = get_logger(__name__)


@dataclass
class MigrationResult:
    """Outcome of one migration run."""

    set_name: str
    table_order: List[str] = field(default_factory=list)
    tables: Dict[str, int] = field(default_factory=dict)
    views: List[str] = field(default_factory=list)
    trigger_failures: Dict[str, str] = field(default_factory=dict)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def total_rows(self) -> int:
        return sum(self.tables.values())

    @property
    def duration_seconds(self) -> float:
        if not self.started_at or not self.completed_at:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "set_name": self.set_name,
            "table_order": self.table_order,
            "tables": self.tables,
            "views": self.views,
            "trigger_failures": self.trigger_failures,
            "total_rows": self.total_rows,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
        }


class Migrator:
    """Copies a sampled, cleaned subset of a source database to a destination.

    Tables are processed one at a time in dependency order. A failure while
    migrating a table or view aborts the run, since later tables may rely on
    values remembered by the failed one. Trigger migration runs last and is
    best effort: failures are logged and reported but never raised.
    """

    def __init__(
        self,
        source: SourceDatabase,
        destination: DestinationDatabase,
        samplers: Optional[SamplerRegistry] = None,
        cleaners: Optional[CleanerRegistry] = None,
    ):
        self.source = source
        self.destination = destination
        self.samplers = samplers or sampler_registry
        self.cleaners = (cleaners or cleaner_registry).copy()
        self.reference_store = ReferenceStore()

    def register_custom_cleaner(self, cleaner: FieldCleaner, alias: str) -> None:
        """Make a cleaner available to this migrator's table configurations."""
        self.cleaners.register(cleaner, alias)

    def plan(self, migration_set: MigrationSet) -> TablePlan:
        """Validate the whole set and return the table processing order.

        Every sampler and cleaner is resolved here so configuration errors
        surface before any table is touched.
        """
        for spec in migration_set.tables.values():
            self.samplers.validate(spec)
            RowCleaner(spec, self.cleaners)
        return plan_table_order(migration_set, self.samplers)

    def validate_dialects(self) -> None:
        if self.source.dialect_name != self.destination.dialect_name:
            raise DialectMismatchError(
                self.source.dialect_name, self.destination.dialect_name
            )

    def execute(self, migration_set: MigrationSet) -> MigrationResult:
        """Perform the configured migrations.

        Raises:
            DialectMismatchError: Before any table, if the dialects differ
            ConfigurationError: Before any table, for invalid configuration
            TableMigrationError: After logging, for the first failed table
            ViewMigrationError: After logging, for the first failed view
        """
        set_name = migration_set.name
        result = MigrationResult(set_name=set_name, started_at=datetime.now())

        self.validate_dialects()
        plan = self.plan(migration_set)
        result.table_order = list(plan.order)

        # Each run starts from an empty reference store
        self.reference_store = ReferenceStore()

        for table in plan.order:
            spec = migration_set.tables[table]
            result.tables[table] = self._migrate_table(
                set_name, spec, migration_set
            )

        for view in migration_set.views:
            self._migrate_view(set_name, view)
            result.views.append(view)

        result.trigger_failures = self._migrate_table_triggers(set_name, plan.order)
        result.completed_at = datetime.now()

        logger.info(
            f"{set_name}: migrated {len(result.tables)} tables "
            f"({result.total_rows} rows) and {len(result.views)} views"
        )
        return result

    def build_table_sampler(
        self, spec: MigrationSpec, migration_set: MigrationSet
    ) -> BaseSampler:
        return self.samplers.build(
            spec,
            self.reference_store,
            self.source.table_source(spec.table),
            strict_references=migration_set.strict_references,
        )

    def _migrate_table(
        self, set_name: str, spec: MigrationSpec, migration_set: MigrationSet
    ) -> int:
        table = spec.table
        sampler_name = spec.sampler

        try:
            sampler = self.build_table_sampler(spec, migration_set)
            sampler_name = sampler.name
            cleaner = RowCleaner(spec, self.cleaners)
            writer = Writer(spec, self.destination, migration_set.batch_size)

            self._ensure_empty_target_table(table)
            rows = sampler.execute()

            for row in rows:
                writer.write(table, cleaner.clean_row(row))
            writer.post_write()

            logger.info(
                f"{set_name}: migrated '{table}' with '{sampler_name}': "
                f"{len(rows)} rows"
            )
            return len(rows)

        except Exception as e:
            logger.error(
                f"{set_name}: failed to migrate '{table}' with '{sampler_name}': {e}"
            )
            raise TableMigrationError(table, sampler_name, e) from e

    def _ensure_empty_target_table(self, table: str) -> None:
        """Recreate the table in the destination as an empty copy of the source."""
        self.destination.drop_table(table)
        self.destination.create_table(self.source.get_table_definition(table))

    def _migrate_view(self, set_name: str, view: str) -> None:
        try:
            self.destination.drop_view(view)
            self.destination.create_view(self.source.get_view_definition(view))
        except Exception as e:
            logger.error(f"{set_name}: failed to migrate view '{view}': {e}")
            raise ViewMigrationError(view, e) from e

        logger.info(f"{set_name}: migrated view '{view}'")

    def _migrate_table_triggers(self, set_name: str, tables: List[str]) -> Dict[str, str]:
        """Recreate source triggers on every migrated table, best effort."""
        failures = {}
        for table in tables:
            try:
                triggers = self.source.get_triggers_definition(table)
                self.destination.migrate_table_triggers(triggers)
                if triggers:
                    logger.info(
                        f"{set_name}: migrated {len(triggers)} triggers on '{table}'"
                    )
            except Exception as e:
                logger.error(
                    f"{set_name}: failed to migrate triggers on '{table}': {e}"
                )
                failures[table] = str(e)
        return failures
