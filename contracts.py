"""
contracts.py - Jedyne źródło prawdy dla typów danych w opcalc.
Wszystkie moduły importują typy WYŁĄCZNIE stąd.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Errors ──────────────────────────────────────

class MalformedExpression(Exception):
    """
    Jedyny błąd zwracany wywołującemu - zarówno dla wyrażeń,
    jak i dla konfiguracji operatorów. `reason` służy tylko diagnostyce.
    """

    def __init__(self, reason: str = "malformed expression") -> None:
        super().__init__(reason)
        self.reason = reason


# ─────────────────────────── Operator Table ──────────────────────────────

class Operation(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def tier(self) -> int:
        return _TIERS[self]


_TIERS = {
    Operation.ADD: 1,
    Operation.SUBTRACT: 1,
    Operation.MULTIPLY: 2,
    Operation.DIVIDE: 2,
}


class PrecedenceMode(str, Enum):
    TIER = "tier"          # siła wiązania wynika z operacji (*/ przed +-)
    PRIORITY = "priority"  # zadeklarowany priorytet, tier bez znaczenia


class OperatorDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    operation: Operation
    priority: int = Field(ge=0)
    left_associative: bool = True

    @property
    def tier(self) -> int:
        return self.operation.tier


class OperatorTable(BaseModel):
    """Niemutowalna tablica symbol → definicja, budowana raz na wywołanie."""
    model_config = ConfigDict(frozen=True)

    operators: dict[str, OperatorDefinition] = Field(default_factory=dict)

    def get(self, symbol: str) -> Optional[OperatorDefinition]:
        return self.operators.get(symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.operators

    def __len__(self) -> int:
        return len(self.operators)

    def definitions(self) -> Iterator[OperatorDefinition]:
        return iter(self.operators.values())


# ─────────────────────────── Lexer ───────────────────────────────────────

class NumberToken(BaseModel):
    kind: Literal["number"] = "number"
    value: float


class OperatorToken(BaseModel):
    kind: Literal["operator"] = "operator"
    definition: OperatorDefinition


class OpenParenToken(BaseModel):
    kind: Literal["open_paren"] = "open_paren"


class CloseParenToken(BaseModel):
    kind: Literal["close_paren"] = "close_paren"


Token = Union[NumberToken, OperatorToken, OpenParenToken, CloseParenToken]


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvaluationResult(BaseModel):
    ok: bool
    value: Optional[float] = None
    error: Optional[str] = None  # diagnostyka, wywołujący sprawdza tylko ok
    token_count: int = 0

    @classmethod
    def success(cls, value: float, token_count: int = 0) -> EvaluationResult:
        return cls(ok=True, value=value, token_count=token_count)

    @classmethod
    def failure(cls, reason: str) -> EvaluationResult:
        return cls(ok=False, error=reason)

    def unwrap(self) -> float:
        if not self.ok or self.value is None:
            raise MalformedExpression(self.error or "malformed expression")
        return self.value
