"""
engine.py - publiczny punkt wejścia opcalc.

Przebieg jednego wywołania:
  1) None jako tekst → MalformedExpression
  2) tablica operatorów wczytana od nowa ze strumienia (przewijanego na początek)
  3) lekser → tokeny; brak tokenów → 0.0
  4) precedence climbing → wynik

evaluate()     - zwraca float albo rzuca MalformedExpression
try_evaluate() - zwraca EvaluationResult, nigdy nie rzuca
"""
from __future__ import annotations

import logging
from typing import IO, Optional

from adapters.evaluator.precedence_evaluator import PrecedenceClimbingEvaluator
from adapters.lexer.word_lexer import WordLexer
from adapters.operator_table.stream_loader import StreamOperatorTableLoader
from config import Settings
from contracts import EvaluationResult, MalformedExpression, OperatorTable, PrecedenceMode, Token
from ports.evaluator import Evaluator
from ports.lexer import Lexer
from ports.operator_table import OperatorTableLoader

logger = logging.getLogger("opcalc.engine")


class ExpressionEngine:
    """Składa loader, lekser i ewaluator w jedno wywołanie evaluate()."""

    def __init__(
        self,
        loader: OperatorTableLoader | None = None,
        lexer: Lexer | None = None,
        evaluator: Evaluator | None = None,
        settings: Settings | None = None,
        precedence: PrecedenceMode | str | None = None,
    ) -> None:
        settings = settings or Settings()
        mode = PrecedenceMode(precedence) if precedence is not None else settings.precedence_mode

        self._loader = loader or StreamOperatorTableLoader()
        self._lexer = lexer or WordLexer()
        self._evaluator = evaluator or PrecedenceClimbingEvaluator(
            mode=mode,
            max_depth=settings.max_nesting_depth,
        )

    def load_table(self, operator_config: IO) -> OperatorTable:
        return self._loader.load(operator_config)

    def tokenize(self, expression_text: Optional[str], operator_config: IO) -> list[Token]:
        if expression_text is None:
            raise MalformedExpression("Expression text is missing")
        table = self.load_table(operator_config)
        return self._lexer.tokenize(expression_text, table)

    def evaluate(self, expression_text: Optional[str], operator_config: IO) -> float:
        return self.try_evaluate(expression_text, operator_config).unwrap()

    def try_evaluate(self, expression_text: Optional[str], operator_config: IO) -> EvaluationResult:
        try:
            tokens = self.tokenize(expression_text, operator_config)
            value = self._evaluator.eval_tokens(tokens)
        except MalformedExpression as exc:
            logger.debug("Rejected %r: %s", expression_text, exc.reason)
            return EvaluationResult.failure(exc.reason)
        return EvaluationResult.success(value, token_count=len(tokens))


_DEFAULT_ENGINE: ExpressionEngine | None = None


def _engine() -> ExpressionEngine:
    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = ExpressionEngine()
    return _DEFAULT_ENGINE


def evaluate(expression_text: Optional[str], operator_config: IO) -> float:
    """Oblicza wyrażenie względem operatorów zadeklarowanych w strumieniu."""
    return _engine().evaluate(expression_text, operator_config)


def try_evaluate(expression_text: Optional[str], operator_config: IO) -> EvaluationResult:
    return _engine().try_evaluate(expression_text, operator_config)
