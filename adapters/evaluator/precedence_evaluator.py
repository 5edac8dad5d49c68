"""
Adapter: PrecedenceClimbingEvaluator
Implementuje port Evaluator - walidacja gramatyki i liczenie w jednym przebiegu.

Gramatyka:
  expr = term (OPERATOR term)*
  term = NUMBER | '(' expr ')'

Siła wiązania operatora (binding power):
  TIER     - tier operacji      */ wiąże mocniej niż +-, priorytet ignorowany
  PRIORITY - priorytet          wyższy priorytet wiąże mocniej, tier ignorowany

Łączność: przy równej sile wiązania lewostronne operatory zwijają od razu,
prawostronne czekają na prawą stronę. Dwa operatory o równej sile wiązania
i różnej łączności nie mogą się spotkać - wyrażenie jest odrzucane.

W obrębie jednego poziomu nawiasów operatory czekają na stosie (bez rekurencji),
więc długie łańcuchy prawostronne nie pogłębiają stosu wywołań. Limit
zagnieżdżenia dotyczy tylko nawiasów.

Wartości zwijane są od razu (bez jawnego AST), w arytmetyce IEEE-754.
"""
from __future__ import annotations

import logging
import math
import operator
from typing import Callable, Optional, Sequence

from contracts import (
    CloseParenToken,
    MalformedExpression,
    NumberToken,
    OpenParenToken,
    Operation,
    OperatorDefinition,
    OperatorToken,
    PrecedenceMode,
    Token,
)

logger = logging.getLogger("opcalc.evaluator")

DEFAULT_MAX_DEPTH = 250


def ieee_divide(a: float, b: float) -> float:
    """Dzielenie zmiennoprzecinkowe bez ZeroDivisionError: ±inf lub nan."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


# Mapowanie operacji na funkcje float
_OP_FUNCS: dict[Operation, Callable[[float, float], float]] = {
    Operation.ADD: operator.add,
    Operation.SUBTRACT: operator.sub,
    Operation.MULTIPLY: operator.mul,
    Operation.DIVIDE: ieee_divide,
}


def apply_operation(operation: Operation, left: float, right: float) -> float:
    return _OP_FUNCS[operation](left, right)


def binding_power(definition: OperatorDefinition, mode: PrecedenceMode) -> int:
    if mode is PrecedenceMode.PRIORITY:
        return definition.priority
    return definition.tier


def _describe(token: Optional[Token]) -> str:
    if token is None:
        return "end of expression"
    if isinstance(token, NumberToken):
        return f"number {token.value!r}"
    if isinstance(token, OperatorToken):
        return f"operator {token.definition.symbol!r}"
    if isinstance(token, OpenParenToken):
        return "'('"
    return "')'"


class _Parser:
    def __init__(self, tokens: Sequence[Token], mode: PrecedenceMode, max_depth: int) -> None:
        self._tokens = tokens
        self._pos = 0
        self._mode = mode
        self._max_depth = max_depth
        self._depth = 0

    def _peek(self) -> Optional[Token]:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _consume(self) -> Token:
        t = self._tokens[self._pos]
        self._pos += 1
        return t

    def parse(self) -> float:
        value = self._expr()
        tok = self._peek()
        if tok is not None:
            if isinstance(tok, CloseParenToken):
                raise MalformedExpression("Unmatched ')'")
            raise MalformedExpression(f"Unexpected {_describe(tok)}")
        return value

    def _expr(self) -> float:
        # Operatory czekające na prawy argument: (definicja, lewy argument)
        pending: list[tuple[OperatorDefinition, float]] = []
        value = self._term()
        while True:
            tok = self._peek()
            if tok is None or isinstance(tok, CloseParenToken):
                break
            if not isinstance(tok, OperatorToken):
                # Dwa termy obok siebie: liczba-liczba, liczba-'(', ')'-liczba, ')'-'('
                raise MalformedExpression(f"Missing operator before {_describe(tok)}")

            definition = tok.definition
            value = self._fold(pending, value, definition)
            self._consume()
            pending.append((definition, value))
            value = self._term()
        return self._fold(pending, value, None)

    def _fold(
        self,
        pending: list[tuple[OperatorDefinition, float]],
        value: float,
        incoming: Optional[OperatorDefinition],
    ) -> float:
        """Zwija oczekujące operatory wiążące mocniej niż `incoming` (None = wszystkie)."""
        while pending:
            top, left = pending[-1]
            if incoming is not None:
                top_bp = binding_power(top, self._mode)
                bp = binding_power(incoming, self._mode)
                if top_bp < bp:
                    break
                if top_bp == bp:
                    if top.left_associative != incoming.left_associative:
                        raise MalformedExpression(
                            f"Operators {top.symbol!r} and {incoming.symbol!r} bind equally "
                            "but differ in associativity"
                        )
                    # Prawostronny: zwinięcie dopiero po prawej stronie
                    if not incoming.left_associative:
                        break
            pending.pop()
            value = apply_operation(top.operation, left, value)
        return value

    def _term(self) -> float:
        tok = self._peek()
        if isinstance(tok, NumberToken):
            self._consume()
            return tok.value
        if isinstance(tok, OpenParenToken):
            self._consume()
            self._depth += 1
            if self._depth > self._max_depth:
                raise MalformedExpression(f"Parentheses nested deeper than {self._max_depth} levels")
            value = self._expr()
            closing = self._peek()
            if not isinstance(closing, CloseParenToken):
                raise MalformedExpression(f"Unmatched '(': expected ')', got {_describe(closing)}")
            self._consume()
            self._depth -= 1
            return value
        raise MalformedExpression(f"Expected a number or '(', got {_describe(tok)}")


class PrecedenceClimbingEvaluator:
    """Ewaluator ciągu tokenów: precedence climbing na jawnym stosie operatorów."""

    def __init__(
        self,
        mode: PrecedenceMode = PrecedenceMode.TIER,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._mode = PrecedenceMode(mode)
        self._max_depth = max_depth

    @property
    def mode(self) -> PrecedenceMode:
        return self._mode

    # -- Evaluator protocol -------------------------------------------------

    def eval_tokens(self, tokens: Sequence[Token]) -> float:
        if not tokens:
            return 0.0
        value = _Parser(tokens, self._mode, self._max_depth).parse()
        logger.debug("Evaluated %d token(s) in %s mode to %r.", len(tokens), self._mode.value, value)
        return value
