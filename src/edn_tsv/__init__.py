"""edn-tsv - Convert line-delimited EDN records into a tab-separated table.

Architecture:
    Every input line is read as one EDN value. Map records are kept and the
    union of their keyword keys becomes the sorted header. Once all input is
    consumed, each record is projected onto the header and written out.
"""

from .emitter import emit_table, project_row
from .ingest import IngestResult, RecordIngestor, ingest
from .printer import render
from .reader import EdnSyntaxError, read_all, read_first
from .utils import ParseError, stream_edn_lines

__all__ = [
    "EdnSyntaxError",
    "IngestResult",
    "ParseError",
    "RecordIngestor",
    "emit_table",
    "ingest",
    "project_row",
    "read_all",
    "read_first",
    "render",
    "stream_edn_lines",
]
