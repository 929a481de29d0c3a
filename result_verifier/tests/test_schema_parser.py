"""Tests for the schema definition parser."""

from __future__ import annotations

import dataclasses
import tempfile
from pathlib import Path

import pytest

from result_verifier.ingest.schema_parser import ParserState, SchemaParser, load_schema, parse_schema
from result_verifier.models.errors import SchemaDefinitionError
from result_verifier.models.schema import ColumnDescriptor, ColumnType


# -----------------------------------------------------------------------
# Types, defaults and explicit lengths
# -----------------------------------------------------------------------


def test_all_types_with_defaults() -> None:
    text = "a integer\nb bigint\nc varchar\nd char\ne decimal\nf date\n"
    schema = parse_schema(text)
    assert schema.names == ["a", "b", "c", "d", "e", "f"]
    assert [c.type for c in schema] == [
        ColumnType.INTEGER,
        ColumnType.BIGINT,
        ColumnType.VARCHAR,
        ColumnType.CHAR,
        ColumnType.DECIMAL,
        ColumnType.DATE,
    ]
    assert schema[2].length == 1
    assert schema[3].length == 1
    assert (schema[4].length, schema[4].precision) == (4, 2)
    assert schema[0].length is None and schema[0].precision is None
    assert all(c.nullable for c in schema)


def test_explicit_length_and_precision() -> None:
    schema = parse_schema("label varchar(20)\nprice decimal(12,3)\n")
    assert schema[0].length == 20
    assert (schema[1].length, schema[1].precision) == (12, 3)


def test_length_and_precision_followed_by_null_info() -> None:
    schema = parse_schema("label char(5) not null\nprice decimal(10,0) null\n")
    assert schema[0] == ColumnDescriptor("label", ColumnType.CHAR, length=5, nullable=False)
    assert schema[1] == ColumnDescriptor("price", ColumnType.DECIMAL, length=10, precision=0, nullable=True)


def test_length_without_closing_paren_is_accepted() -> None:
    schema = parse_schema("label varchar(7\n")
    assert schema[0].length == 7


# -----------------------------------------------------------------------
# Null info
# -----------------------------------------------------------------------


def test_nullability_default_and_explicit() -> None:
    schema = parse_schema("a integer\nb integer null\nc integer not null\n")
    assert [c.nullable for c in schema] == [True, True, False]


@pytest.mark.parametrize("tail", ["nullable", "not", "NOT NULL", "not  null"])
def test_invalid_null_info(tail: str) -> None:
    with pytest.raises(SchemaDefinitionError, match="invalid null info"):
        parse_schema(f"a integer {tail}\n")


# -----------------------------------------------------------------------
# Type / length legality
# -----------------------------------------------------------------------


@pytest.mark.parametrize("decl", ["integer(5)", "bigint(5)", "date(5)"])
def test_length_illegal_for_fixed_width_types(decl: str) -> None:
    with pytest.raises(SchemaDefinitionError, match="cannot have a length"):
        parse_schema(f"a {decl}\n")


@pytest.mark.parametrize("decl", ["integer(5)", "date(5)"])
def test_length_illegal_without_trailing_newline(decl: str) -> None:
    with pytest.raises(SchemaDefinitionError, match="cannot have a length"):
        parse_schema(f"a {decl}")


@pytest.mark.parametrize("decl", ["varchar(5,2)", "char(3,1) not null"])
def test_precision_only_for_decimal(decl: str) -> None:
    with pytest.raises(SchemaDefinitionError, match="cannot have a precision"):
        parse_schema(f"a {decl}\n")


def test_unknown_type() -> None:
    with pytest.raises(SchemaDefinitionError, match="unknown type text"):
        parse_schema("a text\n")


@pytest.mark.parametrize("decl", ["varchar(x)", "varchar()", "decimal(4,two)"])
def test_invalid_numbers(decl: str) -> None:
    with pytest.raises(SchemaDefinitionError, match="invalid"):
        parse_schema(f"a {decl}\n")


def test_zero_length_rejected() -> None:
    with pytest.raises(SchemaDefinitionError, match="length must be > 0"):
        parse_schema("a varchar(0)\n")


# -----------------------------------------------------------------------
# Line structure
# -----------------------------------------------------------------------


@pytest.mark.parametrize("tail", ["integer", "integer not null", "varchar(3)", "decimal(6,1)"])
def test_missing_trailing_newline_keeps_last_column(tail: str) -> None:
    schema = parse_schema(f"first date\nlast {tail}")
    assert schema.names == ["first", "last"]


def test_blank_lines_are_skipped() -> None:
    schema = parse_schema("a integer\n\nb date\n\n")
    assert schema.names == ["a", "b"]


def test_name_without_type() -> None:
    with pytest.raises(SchemaDefinitionError, match="has no type"):
        parse_schema("a integer\nlonely\n")
    with pytest.raises(SchemaDefinitionError, match="has no type"):
        parse_schema("a integer\nlonely")


def test_empty_name() -> None:
    with pytest.raises(SchemaDefinitionError, match="must not be empty"):
        parse_schema(" integer\n")


def test_empty_schema() -> None:
    with pytest.raises(SchemaDefinitionError, match="no columns"):
        parse_schema("")


def test_error_carries_line_number() -> None:
    with pytest.raises(SchemaDefinitionError) as excinfo:
        parse_schema("a integer\nb integer\nc bogus\n", source="s.tbl")
    assert excinfo.value.line == 3
    assert str(excinfo.value).startswith("s.tbl:3\t")


def test_end_of_attribute_requires_newline() -> None:
    parser = SchemaParser()
    parser.state = ParserState.END_OF_ATTRIBUTE
    with pytest.raises(SchemaDefinitionError, match="missing newline"):
        parser.step("x")


def test_closing_a_column_without_type_is_a_schema_error() -> None:
    parser = SchemaParser(source="s.tbl")
    parser.state = ParserState.END_OF_ATTRIBUTE
    with pytest.raises(SchemaDefinitionError, match="has no type") as excinfo:
        parser.step("\n")
    assert excinfo.value.line == 1


def test_newline_is_reprocessed_by_next_state() -> None:
    parser = SchemaParser()
    for ch in "a integer":
        assert parser.step(ch)
    assert parser.state is ParserState.TYPE
    assert parser.step("\n") is False
    assert parser.state is ParserState.NULL_INFO
    assert parser.step("\n") is False
    assert parser.state is ParserState.END_OF_ATTRIBUTE
    assert parser.step("\n") is True
    assert parser.state is ParserState.NAME


# -----------------------------------------------------------------------
# Schema object
# -----------------------------------------------------------------------


def test_schema_is_immutable() -> None:
    schema = parse_schema("a integer\n")
    with pytest.raises(dataclasses.FrozenInstanceError):
        schema.columns = ()  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        schema[0].nullable = False  # type: ignore[misc]


def test_describe_renders_schema_syntax() -> None:
    schema = parse_schema("id integer not null\nprice decimal(12,2)\nname varchar(8)\n")
    assert schema.names == ["id", "price", "name"]
    assert [c.describe() for c in schema] == [
        "id integer not null",
        "price decimal(12,2)",
        "name varchar(8)",
    ]


def test_load_schema_from_file() -> None:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d) / "q1.tbl"
        p.write_text("id integer not null\nrevenue decimal(15,4)", encoding="utf-8")
        schema = load_schema(p)
        assert schema.names == ["id", "revenue"]
        assert schema.source == str(p)
