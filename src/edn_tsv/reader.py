"""EDN reader producing values from ``edn_tsv.values``.

Grammar coverage:
    nil, true, false, strings, characters, integers (``N`` suffix),
    floats (``M`` suffix gives Decimal), keywords, symbols, lists,
    vectors, maps, sets, tagged elements and ``#_`` discards.
    Commas are whitespace and ``;`` starts a comment running to end of line.

Errors carry UTF-8 byte offsets into the text that was read.
"""

import re
from decimal import Decimal
from typing import Any

from .values import Char, EdnList, EdnSet, Keyword, Map, Symbol, Tagged, Vector

_END = object()

_TOKEN = re.compile(r"[^\s,()\[\]{}\"\\;]+")
_INT = re.compile(r"([+-]?(?:0|[1-9][0-9]*))(N?)")
_FLOAT = re.compile(r"([+-]?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?)(M?)")
_SYMBOL = re.compile(r"[A-Za-z.*+!\-_?$%&=<>/][A-Za-z0-9.*+!\-_?$%&=<>/:#']*")
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")

_STRING_ESCAPES = {
    "t": "\t",
    "r": "\r",
    "n": "\n",
    "b": "\b",
    "f": "\f",
    "\\": "\\",
    '"': '"',
}

_NAMED_CHARS = {
    "newline": "\n",
    "space": " ",
    "tab": "\t",
    "return": "\r",
    "formfeed": "\f",
    "backspace": "\b",
}

_CLOSERS = ")]}"


class EdnSyntaxError(Exception):
    """Raised when text is not valid EDN.

    ``lo`` and ``hi`` are byte offsets delimiting the offending span.
    """

    def __init__(self, lo: int, hi: int, message: str) -> None:
        super().__init__(message)
        self.lo = lo
        self.hi = hi
        self.message = message

    def __str__(self) -> str:
        return f"({self.lo}, {self.hi}): {self.message}"


class _Reader:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _byte_offset(self, index: int) -> int:
        index = min(index, len(self.text))
        return len(self.text[:index].encode("utf-8"))

    def _error(self, lo: int, hi: int, message: str) -> EdnSyntaxError:
        return EdnSyntaxError(self._byte_offset(lo), self._byte_offset(hi), message)

    def _skip_whitespace(self) -> None:
        text = self.text
        while self.pos < len(text):
            c = text[self.pos]
            if c.isspace() or c == ",":
                self.pos += 1
            elif c == ";":
                newline = text.find("\n", self.pos)
                self.pos = len(text) if newline == -1 else newline + 1
            else:
                break

    def read(self, closer: str | None = None) -> Any:
        """Read the next form, or return ``_END``.

        ``_END`` means ``closer`` was consumed, or, at top level
        (``closer`` is None), that the input is exhausted.
        """
        while True:
            self._skip_whitespace()
            if self.pos >= len(self.text):
                if closer is not None:
                    raise self._error(
                        self.pos, self.pos, f"Unexpected end of input, expected '{closer}'"
                    )
                return _END

            c = self.text[self.pos]
            if c == closer:
                self.pos += 1
                return _END
            if c in _CLOSERS:
                raise self._error(self.pos, self.pos + 1, f"Unmatched delimiter '{c}'")
            if self.text.startswith("#_", self.pos):
                self.pos += 2
                self._read_required()
                continue
            return self._read_form()

    def _read_required(self) -> Any:
        value = self.read()
        if value is _END:
            raise self._error(self.pos, self.pos, "Unexpected end of input, expected a value")
        return value

    def _read_form(self) -> Any:
        c = self.text[self.pos]
        if c == "(":
            self.pos += 1
            return EdnList(self._read_sequence(")"))
        if c == "[":
            self.pos += 1
            return Vector(self._read_sequence("]"))
        if c == "{":
            return self._read_map()
        if c == "#":
            return self._read_dispatch()
        if c == '"':
            return self._read_string()
        if c == "\\":
            return self._read_char()
        return self._read_atom()

    def _read_sequence(self, closer: str) -> list[Any]:
        items = []
        while True:
            item = self.read(closer)
            if item is _END:
                return items
            items.append(item)

    def _read_map(self) -> Map:
        start = self.pos
        self.pos += 1
        forms = self._read_sequence("}")
        if len(forms) % 2 != 0:
            raise self._error(start, self.pos, "Map literal must contain an even number of forms")
        return Map(zip(forms[::2], forms[1::2]))

    def _read_dispatch(self) -> Any:
        start = self.pos
        if self.text.startswith("#{", self.pos):
            self.pos += 2
            return EdnSet(self._read_sequence("}"))

        match = _TOKEN.match(self.text, self.pos + 1)
        if match is None or not match.group()[0].isalpha():
            raise self._error(start, self.pos + 1, "Invalid dispatch character")
        tag = match.group()
        if not _SYMBOL.fullmatch(tag):
            raise self._error(start, match.end(), f"Invalid tag '{tag}'")
        self.pos = match.end()
        return Tagged(tag, self._read_required())

    def _read_string(self) -> str:
        text = self.text
        start = self.pos
        self.pos += 1
        chunks = []
        while True:
            if self.pos >= len(text):
                raise self._error(start, self.pos, "Unterminated string")
            c = text[self.pos]
            if c == '"':
                self.pos += 1
                return "".join(chunks)
            if c != "\\":
                chunks.append(c)
                self.pos += 1
                continue

            escape = text[self.pos + 1:self.pos + 2]
            if escape in _STRING_ESCAPES:
                chunks.append(_STRING_ESCAPES[escape])
                self.pos += 2
            elif escape == "u" and _HEX4.fullmatch(text, self.pos + 2, self.pos + 6):
                chunks.append(chr(int(text[self.pos + 2:self.pos + 6], 16)))
                self.pos += 6
            elif escape == "":
                raise self._error(start, len(text), "Unterminated string")
            else:
                raise self._error(self.pos, self.pos + 2, f"Invalid escape sequence '\\{escape}'")

    def _read_char(self) -> Char:
        text = self.text
        start = self.pos
        self.pos += 1
        if self.pos >= len(text) or text[self.pos].isspace():
            raise self._error(start, self.pos, "Invalid character literal")

        match = _TOKEN.match(text, self.pos)
        if match is None:
            # A delimiter such as \( or \"
            self.pos += 1
            return Char(text[self.pos - 1])

        name = match.group()
        self.pos = match.end()
        if len(name) == 1:
            return Char(name)
        if name in _NAMED_CHARS:
            return Char(_NAMED_CHARS[name])
        if name[0] == "u" and _HEX4.fullmatch(name, 1):
            return Char(chr(int(name[1:], 16)))
        raise self._error(start, self.pos, f"Invalid character literal '\\{name}'")

    def _read_atom(self) -> Any:
        start = self.pos
        match = _TOKEN.match(self.text, self.pos)
        if match is None:
            raise self._error(start, start + 1, f"Unexpected character '{self.text[start]}'")
        token = match.group()
        self.pos = match.end()

        if token == "nil":
            return None
        if token == "true":
            return True
        if token == "false":
            return False

        number = _INT.fullmatch(token)
        if number:
            return int(number.group(1))
        number = _FLOAT.fullmatch(token)
        if number:
            if number.group(2):
                return Decimal(number.group(1))
            return float(number.group(1))

        if token[0] == ":":
            if _SYMBOL.fullmatch(token, 1):
                return Keyword(token[1:])
            raise self._error(start, self.pos, f"Invalid keyword '{token}'")
        if _SYMBOL.fullmatch(token) and not _starts_like_number(token):
            return Symbol(token)
        raise self._error(start, self.pos, f"Invalid token '{token}'")


def _starts_like_number(token: str) -> bool:
    if token[0] in "+-.":
        return len(token) > 1 and token[1].isdigit()
    return token[0].isdigit()


def read_first(text: str) -> tuple[bool, Any]:
    """Read the first value in ``text``.

    Returns ``(False, None)`` when the text holds no value at all (blank,
    comments, commas or discarded forms), so ``nil`` stays distinguishable
    from an empty line. Anything after the first value is not examined.
    """
    value = _Reader(text).read()
    if value is _END:
        return False, None
    return True, value


def read_all(text: str) -> list[Any]:
    """Read every top-level value in ``text``."""
    reader = _Reader(text)
    values = []
    while True:
        value = reader.read()
        if value is _END:
            return values
        values.append(value)
