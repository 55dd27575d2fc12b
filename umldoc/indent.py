# umldoc/indent.py

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass
class _Cursor:
    """Write position shared by a writer and all of its indented views."""

    line_start: bool = True
    pending_space: bool = False


class IndentingWriter:
    """
    Text sink that prefixes every line with the current indentation.

    indent() hands out a view one level deeper that shares the same delegate and
    cursor, so nested parts can write through their own view while the line state
    stays consistent. Every write method returns the writer for chaining:

        output.append("class Foo").whitespace().append("{").newline()

    whitespace() is deferred: it becomes a single space only when more text follows
    on the same line, so lines never end in trailing blanks.
    """

    def __init__(
        self,
        delegate: Optional[TextIO] = None,
        indentation: int = 2,
        level: int = 0,
        _cursor: Optional[_Cursor] = None,
    ) -> None:
        if indentation < 0 or level < 0:
            raise ValueError("Indentation and level must not be negative.")
        self._delegate = delegate if delegate is not None else io.StringIO()
        self.indentation = indentation
        self.level = level
        self._cursor = _cursor or _Cursor()

    def indent(self) -> "IndentingWriter":
        return IndentingWriter(self._delegate, self.indentation, self.level + 1, self._cursor)

    def unindent(self) -> "IndentingWriter":
        return IndentingWriter(self._delegate, self.indentation, max(0, self.level - 1), self._cursor)

    def append(self, text: object) -> "IndentingWriter":
        for line in str(text).splitlines(keepends=True):
            body = line.rstrip("\r\n")
            if body:
                self._write_body(body)
            if line != body:
                self.newline()
        return self

    def whitespace(self) -> "IndentingWriter":
        if not self._cursor.line_start:
            self._cursor.pending_space = True
        return self

    def newline(self) -> "IndentingWriter":
        self._delegate.write("\n")
        self._cursor.line_start = True
        self._cursor.pending_space = False
        return self

    def _write_body(self, body: str) -> None:
        cursor = self._cursor
        if cursor.line_start:
            self._delegate.write(" " * (self.indentation * self.level))
            cursor.line_start = False
        elif cursor.pending_space and not body[0].isspace():
            self._delegate.write(" ")
        cursor.pending_space = False
        self._delegate.write(body)

    def getvalue(self) -> str:
        if isinstance(self._delegate, io.StringIO):
            return self._delegate.getvalue()
        raise TypeError("Delegate is not an in-memory buffer.")

    def __str__(self) -> str:
        return self.getvalue()
