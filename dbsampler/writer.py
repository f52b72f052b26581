from typing import Any, Dict, List, Optional

from dbsampler.logging import get_logger
from dbsampler.spec import DEFAULT_BATCH_SIZE, MigrationSpec

logger = get_logger(__name__)


class Writer:
    """Writes cleaned rows of one table to the destination.

    Rows are buffered and inserted in batches; ``post_write`` must be called
    once after the last row, even when nothing was written, to flush the
    buffer and finalise the table.
    """

    def __init__(
        self,
        spec: MigrationSpec,
        destination,
        batch_size: Optional[int] = None,
    ):
        self.spec = spec
        self.destination = destination
        self.batch_size = batch_size or DEFAULT_BATCH_SIZE
        self.rows_written = 0
        self._table_name: Optional[str] = None
        self._buffer: List[Dict[str, Any]] = []

    def write(self, table_name: str, row: Dict[str, Any]) -> None:
        if self._table_name is not None and table_name != self._table_name:
            self.flush()
        self._table_name = table_name
        self._buffer.append(row)
        if len(self._buffer) >= self.batch_size:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return
        rows, self._buffer = self._buffer, []
        self.destination.insert_rows(self._table_name, rows)
        self.rows_written += len(rows)

    def post_write(self) -> None:
        self.flush()
        table_name = self._table_name or self.spec.table

        for statement in self.spec.post_import_sql:
            logger.debug(f"Running post-import SQL for {table_name}: {statement}")
            self.destination.execute_sql(statement)

        self.destination.finalize_table(table_name)
