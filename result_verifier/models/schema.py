from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from result_verifier.models.errors import SchemaDefinitionError


class ColumnType(Enum):
    """Column types of the schema vocabulary (value = keyword in schema files)."""

    INTEGER = "integer"
    BIGINT = "bigint"
    VARCHAR = "varchar"
    CHAR = "char"
    DECIMAL = "decimal"
    DATE = "date"

    @property
    def takes_length(self) -> bool:
        return self in (ColumnType.VARCHAR, ColumnType.CHAR, ColumnType.DECIMAL)

    @property
    def takes_precision(self) -> bool:
        return self is ColumnType.DECIMAL


# Placeholders applied as soon as the type keyword is read; an explicit
# "(length[,precision])" overwrites them.
DEFAULT_LENGTH = {ColumnType.VARCHAR: 1, ColumnType.CHAR: 1, ColumnType.DECIMAL: 4}
DEFAULT_PRECISION = {ColumnType.DECIMAL: 2}


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    One schema column, in declaration order.

    name:
      non-empty identifier.
    type:
      one of :class:`ColumnType`.
    length:
      set (> 0) for varchar, char and decimal only.
    precision:
      set (>= 0) for decimal only: number of fractional digits.
    nullable:
      whether the literal ``null`` is an acceptable value.
    """
    name: str
    type: ColumnType
    length: Optional[int] = None
    precision: Optional[int] = None
    nullable: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaDefinitionError("column name must not be empty")
        if self.type.takes_length:
            if self.length is None or self.length <= 0:
                raise SchemaDefinitionError(f"{self.type.value} column '{self.name}' needs a length > 0")
        elif self.length is not None:
            raise SchemaDefinitionError(f"type {self.type.value} cannot have a length")
        if self.type.takes_precision:
            if self.precision is None or self.precision < 0:
                raise SchemaDefinitionError(f"decimal column '{self.name}' needs a precision >= 0")
        elif self.precision is not None:
            raise SchemaDefinitionError(f"type {self.type.value} cannot have a precision")

    def describe(self) -> str:
        """Render back in schema-file syntax, e.g. ``price decimal(12,2) not null``."""
        txt = f"{self.name} {self.type.value}"
        if self.type.takes_precision:
            txt += f"({self.length},{self.precision})"
        elif self.type.takes_length:
            txt += f"({self.length})"
        return txt + ("" if self.nullable else " not null")


@dataclass(frozen=True)
class Schema:
    """
    Ordered, immutable column list of one result file.

    Built once per schema file and shared read-only across every record
    comparison of a file pair.
    """
    columns: Tuple[ColumnDescriptor, ...]
    source: str = "<schema>"

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self.columns)

    def __getitem__(self, index: int) -> ColumnDescriptor:
        return self.columns[index]

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.columns]
