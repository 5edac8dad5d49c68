"""
Adapter: StreamOperatorTableLoader
Implementuje port OperatorTableLoader.

Format strumienia (tylko białe znaki jako separatory, linie bez znaczenia):
  declaration := SYMBOL OPCHAR PRIORITY FLAG
  OPCHAR      := '+' | '-' | '*' | '/'
  PRIORITY    := [0-9]+
  FLAG        := 'L' | '1'  (lewostronna)  |  'R' | '0'  (prawostronna)

Strumień jest przewijany na początek przed czytaniem i po nim, więc kolejne
wywołania na tym samym uchwycie widzą te same deklaracje.
"""
from __future__ import annotations

import logging
import re
from typing import IO

from contracts import MalformedExpression, Operation, OperatorDefinition, OperatorTable

logger = logging.getLogger("opcalc.operator_table")

_FIELDS_PER_DECLARATION = 4

_PRIORITY_RE = re.compile(r"^[0-9]+$")

# Ten sam kształt co literał liczbowy w lekserze
_NUMBER_RE = re.compile(r"^-?[0-9]+(?:\.[0-9]+)?$")

_FLAGS: dict[str, bool] = {
    "L": True,
    "1": True,
    "R": False,
    "0": False,
}


def parse_declaration(fields: list[str]) -> OperatorDefinition:
    """Buduje OperatorDefinition z czterech pól deklaracji."""
    symbol, op_char, priority, flag = fields

    if "(" in symbol or ")" in symbol:
        raise MalformedExpression(f"Operator symbol {symbol!r} contains a parenthesis")
    if _NUMBER_RE.match(symbol):
        raise MalformedExpression(f"Operator symbol {symbol!r} looks like a number")

    try:
        operation = Operation(op_char)
    except ValueError:
        raise MalformedExpression(
            f"Unknown operation {op_char!r} for symbol {symbol!r}"
        ) from None

    if not _PRIORITY_RE.match(priority):
        raise MalformedExpression(f"Invalid priority {priority!r} for symbol {symbol!r}")

    if flag not in _FLAGS:
        raise MalformedExpression(f"Invalid associativity flag {flag!r} for symbol {symbol!r}")

    return OperatorDefinition(
        symbol=symbol,
        operation=operation,
        priority=int(priority),
        left_associative=_FLAGS[flag],
    )


class StreamOperatorTableLoader:
    """Wczytuje tablicę operatorów ze strumienia znakowego."""

    # -- OperatorTableLoader protocol ---------------------------------------

    def load(self, stream: IO) -> OperatorTable:
        if stream is None:
            raise MalformedExpression("Missing operator configuration stream")

        fields = self._read_all(stream).split()
        if len(fields) % _FIELDS_PER_DECLARATION:
            raise MalformedExpression(
                f"Incomplete operator declaration: {fields[-(len(fields) % _FIELDS_PER_DECLARATION):]!r}"
            )

        operators: dict[str, OperatorDefinition] = {}
        for start in range(0, len(fields), _FIELDS_PER_DECLARATION):
            definition = parse_declaration(fields[start:start + _FIELDS_PER_DECLARATION])
            if definition.symbol in operators:
                logger.debug("Operator %r redeclared, last declaration wins.", definition.symbol)
            operators[definition.symbol] = definition

        return OperatorTable(operators=operators)

    # -- Prywatne -----------------------------------------------------------

    def _read_all(self, stream: IO) -> str:
        seekable = self._is_seekable(stream)
        if seekable:
            stream.seek(0)
        else:
            logger.warning(
                "Operator stream is not seekable; reading from the current position only once."
            )

        content = stream.read()

        if seekable:
            stream.seek(0)

        if isinstance(content, bytes):
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedExpression(f"Operator stream is not valid UTF-8: {exc}") from None
        return content or ""

    @staticmethod
    def _is_seekable(stream: IO) -> bool:
        try:
            return bool(stream.seekable())
        except (AttributeError, ValueError):
            return False
