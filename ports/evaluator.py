"""
Port: Evaluator
Odpowiedzialność: walidacja gramatyki i liczenie wartości ciągu tokenów.
"""
from typing import Protocol, Sequence, runtime_checkable

from contracts import Token


@runtime_checkable
class Evaluator(Protocol):
    def eval_tokens(self, tokens: Sequence[Token]) -> float:
        """
        Validates an infix token sequence and computes its value in one pass.
        Binding strength comes from each operator's definition (tier or
        declared priority, depending on the adapter's precedence mode);
        associativity from its left_associative flag.
        Returns 0.0 for an empty sequence.
        Raises MalformedExpression on any grammar violation, and when two
        operators of equal binding strength but different associativity meet.
        Division by zero follows IEEE-754 (inf / nan), it never raises.
        """
        ...
