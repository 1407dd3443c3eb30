"""Utility functions for edn-tsv."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, TextIO

from .reader import EdnSyntaxError, read_first

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when an input line is not valid EDN. Fatal for the whole run."""

    def __init__(self, linenum: int, cause: EdnSyntaxError) -> None:
        super().__init__(linenum, cause)
        self.linenum = linenum
        self.cause = cause

    @property
    def lo(self) -> int:
        return self.cause.lo

    @property
    def hi(self) -> int:
        return self.cause.hi

    @property
    def message(self) -> str:
        return self.cause.message

    def __str__(self) -> str:
        return f"{self.linenum} ({self.lo}, {self.hi}): {self.message}"


def stream_edn_lines(input_stream: Iterable[str] | TextIO) -> Iterator[tuple[int, Any]]:
    """Stream and parse EDN lines from input, yielding ``(line number, value)``.

    Line numbers are 0-based. Lines holding no value (blank, comment only)
    are skipped. Terminates on EOF (stdin closed).

    Raises:
        ParseError: On the first line that is not valid EDN.
    """
    for linenum, line in enumerate(input_stream):
        line = line.rstrip("\r\n")
        try:
            found, value = read_first(line)
        except EdnSyntaxError as e:
            raise ParseError(linenum, e) from e
        if not found:
            logger.debug("Line %d holds no value", linenum)
            continue
        yield linenum, value
