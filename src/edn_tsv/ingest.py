"""Record ingestion: keep map records and collect the union of their keyword keys."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, TextIO

from .printer import render
from .utils import stream_edn_lines
from .values import Keyword, Map

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """Everything the table emitter needs: sorted column keys and records in input order."""

    columns: list[str]
    records: list[Map] = field(default_factory=list)


class RecordIngestor:
    """Accumulates records and column keys from parsed values.

    Top-level values that are not maps are dropped. Map keys that are not
    keywords are reported and never become columns; the record is kept.
    """

    def __init__(self) -> None:
        self.records: list[Map] = []
        self._columns: set[str] = set()
        self.skipped_records = 0
        self.skipped_keys = 0

    def add(self, linenum: int, value: Any) -> bool:
        """Classify one parsed value. Returns True if it was kept as a record."""
        if not isinstance(value, Map):
            logger.warning("Skipping non map on line %d", linenum)
            self.skipped_records += 1
            return False

        for key in value:
            if isinstance(key, Keyword):
                self._columns.add(key.name)
            else:
                logger.warning("Skipping non keyword key: %s on line %d", render(key), linenum)
                self.skipped_keys += 1

        self.records.append(value)
        return True

    @property
    def columns(self) -> list[str]:
        """Column keys in lexicographic order."""
        return sorted(self._columns)

    def result(self) -> IngestResult:
        return IngestResult(columns=self.columns, records=list(self.records))


def ingest(input_stream: Iterable[str] | TextIO) -> IngestResult:
    """Read every line of ``input_stream`` and return the frozen columns and records.

    Raises:
        ParseError: If any line is not valid EDN.
    """
    ingestor = RecordIngestor()
    for linenum, value in stream_edn_lines(input_stream):
        ingestor.add(linenum, value)
    logger.info(
        "Ingested %d records with %d columns (%d skipped lines, %d skipped keys)",
        len(ingestor.records),
        len(ingestor.columns),
        ingestor.skipped_records,
        ingestor.skipped_keys,
    )
    return ingestor.result()
