import csv
from collections.abc import Sequence
from typing import Any, Protocol, TextIO


class Writer(Protocol):
    """Sink for a rectangular table: one header, then rows of the same width."""

    def write_header(self, columns: Sequence[str]) -> None: ...

    def add_row(self, row: Sequence[str]) -> None: ...

    def close(self) -> dict[str, Any]: ...


class TsvWriter:
    """Writes tab-separated values to a text stream.

    Fields containing a tab, a double quote or a line break are quoted.
    The stream is flushed, not closed, so stdout can be passed in.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self._writer = csv.writer(
            stream,
            delimiter="\t",
            quotechar='"',
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )
        self.num_columns = 0
        self.total_rows = 0

    def write_header(self, columns: Sequence[str]) -> None:
        self.num_columns = len(columns)
        self._writer.writerow(columns)

    def add_row(self, row: Sequence[str]) -> None:
        self._writer.writerow(row)
        self.total_rows += 1

    def close(self) -> dict[str, Any]:
        self.stream.flush()
        return {"total_rows": self.total_rows, "num_columns": self.num_columns}

