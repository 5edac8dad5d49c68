from __future__ import annotations

import io

import pytest

from adapters.operator_table.stream_loader import StreamOperatorTableLoader, parse_declaration
from contracts import MalformedExpression, Operation


class _OneShotStream:
    def __init__(self, text: str) -> None:
        self._text = text

    def seekable(self) -> bool:
        return False

    def read(self) -> str:
        text, self._text = self._text, ""
        return text


def test_load_reads_declarations_across_lines():
    table = StreamOperatorTableLoader().load(io.StringIO("a + 10 L \n\t b - 3 R\nm * 0 1 d / 7 0"))

    assert len(table) == 4
    assert table.get("a").operation == Operation.ADD
    assert table.get("a").priority == 10
    assert table.get("a").left_associative is True
    assert table.get("b").left_associative is False
    assert table.get("m").left_associative is True
    assert table.get("d").operation == Operation.DIVIDE
    assert table.get("d").left_associative is False


def test_load_empty_stream_gives_empty_table():
    table = StreamOperatorTableLoader().load(io.StringIO(""))

    assert len(table) == 0
    assert "a" not in table


def test_load_last_declaration_wins():
    table = StreamOperatorTableLoader().load(io.StringIO("a + 10 L a * 2 R"))

    assert len(table) == 1
    assert table.get("a").operation == Operation.MULTIPLY
    assert table.get("a").priority == 2
    assert table.get("a").left_associative is False


def test_load_rewinds_stream_for_repeated_calls():
    stream = io.StringIO("a + 10 L")
    loader = StreamOperatorTableLoader()

    first = loader.load(stream)
    stream.read()  # kursor na końcu, jak po obcym odczycie
    second = loader.load(stream)

    assert first == second
    assert stream.tell() == 0


def test_load_accepts_binary_stream():
    table = StreamOperatorTableLoader().load(io.BytesIO(b"x / 1 L"))

    assert table.get("x").operation == Operation.DIVIDE


def test_load_non_seekable_stream_is_read_once():
    stream = _OneShotStream("a + 1 L")
    loader = StreamOperatorTableLoader()

    assert "a" in loader.load(stream)
    assert len(loader.load(stream)) == 0


def test_load_rejects_unknown_operation():
    with pytest.raises(MalformedExpression):
        StreamOperatorTableLoader().load(io.StringIO("a + 10 L p ^ 3 L"))


def test_load_rejects_incomplete_declaration():
    with pytest.raises(MalformedExpression):
        StreamOperatorTableLoader().load(io.StringIO("a + 10 L b -"))


def test_load_rejects_missing_stream():
    with pytest.raises(MalformedExpression):
        StreamOperatorTableLoader().load(None)


def test_parse_declaration_rejects_bad_priority():
    for priority in ("-1", "1.5", "ten", "+3"):
        with pytest.raises(MalformedExpression):
            parse_declaration(["a", "+", priority, "L"])


def test_parse_declaration_rejects_bad_flag():
    for flag in ("l", "2", "left", "X"):
        with pytest.raises(MalformedExpression):
            parse_declaration(["a", "+", "1", flag])


def test_parse_declaration_rejects_unusable_symbols():
    for symbol in ("(", "a)", "12", "-3.5"):
        with pytest.raises(MalformedExpression):
            parse_declaration([symbol, "+", "1", "L"])


def test_parse_declaration_allows_arithmetic_character_as_symbol():
    definition = parse_declaration(["-", "-", "1", "L"])

    assert definition.symbol == "-"
    assert definition.operation == Operation.SUBTRACT
    assert definition.tier == 1
