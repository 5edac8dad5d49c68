"""
Port: Lexer
Odpowiedzialność: podział tekstu wyrażenia na sklasyfikowane tokeny.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import OperatorTable, Token


@runtime_checkable
class Lexer(Protocol):
    def tokenize(self, text: Optional[str], table: OperatorTable) -> list[Token]:
        """
        Splits expression text into Number / Operator / OpenParen / CloseParen
        tokens, resolving operator symbols verbatim against `table`.
        Returns [] for empty or whitespace-only text.
        Raises MalformedExpression for None text or any unclassifiable word
        (lexing is all-or-nothing).
        """
        ...
