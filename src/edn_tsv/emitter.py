"""Project records onto the column set and feed rows to a writer."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .printer import render
from .values import Keyword, Map
from .writer import Writer

logger = logging.getLogger(__name__)


def project_row(record: Map, columns: Sequence[str]) -> list[str]:
    """Render one cell per column; columns missing from ``record`` become empty strings."""
    row = []
    for column in columns:
        key = Keyword(column)
        row.append(render(record[key]) if key in record else "")
    return row


def emit_table(columns: Sequence[str], records: Iterable[Map], writer: Writer) -> dict[str, Any]:
    """Write the header, then one row per record in order, and close the writer.

    Returns:
        The writer's statistics.
    """
    writer.write_header(columns)
    for record in records:
        writer.add_row(project_row(record, columns))
    stats = writer.close()
    logger.info("Wrote %s rows with %s columns", stats["total_rows"], stats["num_columns"])
    return stats
