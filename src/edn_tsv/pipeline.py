"""Runs the two phases of a conversion: ingest everything, then emit the table."""

import logging
from collections.abc import Iterable
from typing import Any, TextIO

from .emitter import emit_table
from .ingest import IngestResult, ingest
from .writer import Writer

logger = logging.getLogger(__name__)


class Pipeline:
    """Converts an EDN line stream into a table written through ``writer``."""

    def __init__(self, input_stream: Iterable[str] | TextIO, writer: Writer) -> None:
        """
        Initialize pipeline.

        Args:
            input_stream: Lines of EDN, one value per line
            writer: Table sink; receives nothing until ingestion has finished
        """
        self.input_stream = input_stream
        self.writer = writer

    def run(self) -> dict[str, Any]:
        """
        Run both phases and return the writer's statistics.

        Raises:
            ParseError: If a line is malformed; the writer is never touched.
            OSError: If reading input or writing output fails.
        """
        result = self._ingest()
        return self._emit(result)

    def _ingest(self) -> IngestResult:
        logger.debug("Reading records...")
        return ingest(self.input_stream)

    def _emit(self, result: IngestResult) -> dict[str, Any]:
        logger.debug("Writing %d records...", len(result.records))
        return emit_table(result.columns, result.records, self.writer)
