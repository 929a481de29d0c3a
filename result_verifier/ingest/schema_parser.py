"""Schema definition parser.

Schema files declare one column per line::

    name type[(length[,precision])] [null|not null]

e.g.::

    id integer not null
    label varchar(20)
    price decimal(12,2) null
    day date

The parser is a character-level state machine
``NAME -> TYPE -> [TYPE_LENGTH] -> [TYPE_PRECISION] -> NULL_INFO -> END_OF_ATTRIBUTE -> NAME``.
Each state has one handler that looks at a single character and returns
whether the character was consumed; a newline that ends a state is handed to
the next state again, which is how a column line is closed.

Parsing is all or nothing: either the whole definition yields a
:class:`~result_verifier.models.schema.Schema` or a
:class:`~result_verifier.models.errors.SchemaDefinitionError` is raised.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from result_verifier.ingest.byte_source import ByteSource
from result_verifier.models.errors import SchemaDefinitionError
from result_verifier.models.schema import (
    DEFAULT_LENGTH,
    DEFAULT_PRECISION,
    ColumnDescriptor,
    ColumnType,
    Schema,
)


_NUMBER = re.compile(r"(\d+)\)?")
_TYPES = {t.value: t for t in ColumnType}
_NULL_INFO = {"not null": False, "null": True, "": True}


class ParserState(Enum):
    NAME = "name"
    TYPE = "type"
    TYPE_LENGTH = "type length"
    TYPE_PRECISION = "type precision"
    NULL_INFO = "null info"
    END_OF_ATTRIBUTE = "end of attribute"


class SchemaParser:
    """Single-use parser; call :meth:`parse` once per definition text."""

    def __init__(self, source: str = "<schema>"):
        self.source = source
        self.state = ParserState.NAME
        self.line = 1
        self._buffer: List[str] = []
        self._columns: List[ColumnDescriptor] = []
        self._reset_column()
        self._handlers: Dict[ParserState, Callable[[str], bool]] = {
            ParserState.NAME: self._on_name,
            ParserState.TYPE: self._on_type,
            ParserState.TYPE_LENGTH: self._on_type_length,
            ParserState.TYPE_PRECISION: self._on_type_precision,
            ParserState.NULL_INFO: self._on_null_info,
            ParserState.END_OF_ATTRIBUTE: self._on_end_of_attribute,
        }

    def parse(self, text: str) -> Schema:
        for ch in text:
            while not self.step(ch):
                pass
        self._finish()
        if not self._columns:
            raise self._error("schema defines no columns")
        return Schema(columns=tuple(self._columns), source=self.source)

    def step(self, ch: str) -> bool:
        """Feed one character; False means it must be fed again to the new state."""
        return self._handlers[self.state](ch)

    # -------------------------
    # State handlers
    # -------------------------
    def _on_name(self, ch: str) -> bool:
        if ch == " ":
            if not self._buffer:
                raise self._error("column name must not be empty")
            self._name = self._take()
            self.state = ParserState.TYPE
        elif ch == "\n":
            if self._buffer:
                raise self._error(f"column '{self._take()}' has no type")
            self.line += 1  # blank line
        else:
            self._buffer.append(ch)
        return True

    def _on_type(self, ch: str) -> bool:
        if ch not in " (\n":
            self._buffer.append(ch)
            return True
        self._resolve_type(self._take())
        if ch == "(":
            self.state = ParserState.TYPE_LENGTH
        else:
            self.state = ParserState.NULL_INFO
        return ch != "\n"

    def _on_type_length(self, ch: str) -> bool:
        if ch not in " ,\n":
            self._buffer.append(ch)
            return True
        self._resolve_length(self._take())
        if ch == ",":
            self.state = ParserState.TYPE_PRECISION
        else:
            self.state = ParserState.NULL_INFO
        return ch != "\n"

    def _on_type_precision(self, ch: str) -> bool:
        if ch not in " \n":
            self._buffer.append(ch)
            return True
        self._resolve_precision(self._take())
        self.state = ParserState.NULL_INFO
        return ch != "\n"

    def _on_null_info(self, ch: str) -> bool:
        if ch != "\n":
            self._buffer.append(ch)
            return True
        self._resolve_null_info(self._take())
        self.state = ParserState.END_OF_ATTRIBUTE
        return False

    def _on_end_of_attribute(self, ch: str) -> bool:
        if ch != "\n":
            raise self._error("missing newline at end of attribute")
        self._push_column()
        self.line += 1
        self.state = ParserState.NAME
        return True

    # -------------------------
    # Resolution rules
    # -------------------------
    def _resolve_type(self, token: str) -> None:
        column_type = _TYPES.get(token)
        if column_type is None:
            raise self._error(f"unknown type {token}")
        self._type = column_type
        self._length = DEFAULT_LENGTH.get(column_type)
        self._precision = DEFAULT_PRECISION.get(column_type)

    def _resolve_length(self, token: str) -> None:
        if self._type is None or not self._type.takes_length:
            raise self._error(f"type {self._type_name()} cannot have a length")
        value = self._parse_number(token, "length")
        if value <= 0:
            raise self._error(f"length must be > 0, got {value}")
        self._length = value

    def _resolve_precision(self, token: str) -> None:
        if self._type is None or not self._type.takes_precision:
            raise self._error(f"type {self._type_name()} cannot have a precision")
        self._precision = self._parse_number(token, "precision")

    def _resolve_null_info(self, token: str) -> None:
        if token not in _NULL_INFO:
            raise self._error(f"invalid null info '{token}'")
        self._nullable = _NULL_INFO[token]

    def _finish(self) -> None:
        # Input may end without a trailing newline: close the last column.
        token = self._take()
        if self.state is ParserState.NAME:
            if token:
                raise self._error(f"column '{token}' has no type")
            return
        if self.state is ParserState.TYPE:
            self._resolve_type(token)
        elif self.state is ParserState.TYPE_LENGTH:
            self._resolve_length(token)
        elif self.state is ParserState.TYPE_PRECISION:
            self._resolve_precision(token)
        elif self.state is ParserState.NULL_INFO:
            self._resolve_null_info(token)
        self._push_column()
        self.state = ParserState.NAME

    # -------------------------
    # Internals
    # -------------------------
    def _reset_column(self) -> None:
        self._name = ""
        self._type: Optional[ColumnType] = None
        self._length: Optional[int] = None
        self._precision: Optional[int] = None
        self._nullable = True

    def _push_column(self) -> None:
        if self._type is None:
            raise self._error(f"column '{self._name}' has no type")
        try:
            column = ColumnDescriptor(
                name=self._name,
                type=self._type,
                length=self._length,
                precision=self._precision,
                nullable=self._nullable,
            )
        except SchemaDefinitionError as e:
            raise self._error(e.message) from e
        self._columns.append(column)
        self._reset_column()

    def _take(self) -> str:
        token = "".join(self._buffer)
        self._buffer.clear()
        return token

    def _type_name(self) -> str:
        return self._type.value if self._type is not None else "<none>"

    def _parse_number(self, token: str, what: str) -> int:
        m = _NUMBER.fullmatch(token)
        if m is None:
            raise self._error(f"invalid {what} '{token}'")
        return int(m.group(1))

    def _error(self, message: str) -> SchemaDefinitionError:
        return SchemaDefinitionError(message, source=self.source, line=self.line)


def parse_schema(text: str, *, source: str = "<schema>") -> Schema:
    """Parse schema definition text into a :class:`Schema`."""
    return SchemaParser(source).parse(text)


def load_schema(file_path: str | Path, *, encoding: str = "utf-8") -> Schema:
    """Parse the schema definition stored in ``file_path``."""
    with ByteSource.open(file_path) as src:
        try:
            text = src.text(encoding)
        except UnicodeDecodeError as e:
            raise SchemaDefinitionError(f"schema is not valid {encoding}: {e}", source=src.filename) from e
    return parse_schema(text, source=src.filename)
