"""
Adapter: WordLexer
Implementuje port Lexer.

Słowo = maksymalny ciąg znaków bez białych znaków i bez nawiasów.
Nawiasy są zawsze osobnymi tokenami, także gdy przylegają do słowa: "(2" → "(", "2".

Klasyfikacja słowa:
  NUMBER   - -?[0-9]+(\\.[0-9]+)?   (minus tylko doklejony do cyfr)
  OPERATOR - dokładnie zadeklarowany symbol z tablicy
  inaczej  - MalformedExpression (lexing wszystko-albo-nic)
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from contracts import (
    CloseParenToken,
    MalformedExpression,
    NumberToken,
    OpenParenToken,
    OperatorTable,
    OperatorToken,
    Token,
)

logger = logging.getLogger("opcalc.lexer")

_WORD_RE = re.compile(r"[()]|[^\s()]+")

_NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


def is_number_word(word: str) -> bool:
    return _NUMBER_RE.fullmatch(word) is not None


class WordLexer:
    """Tokenizer wyrażeń względem dynamicznej tablicy operatorów."""

    # -- Lexer protocol -----------------------------------------------------

    def tokenize(self, text: Optional[str], table: OperatorTable) -> list[Token]:
        if text is None:
            raise MalformedExpression("Expression text is missing")

        tokens: list[Token] = []
        for word in _WORD_RE.findall(text):
            tokens.append(self._classify(word, table))

        logger.debug("Tokenized %d word(s).", len(tokens))
        return tokens

    # -- Prywatne -----------------------------------------------------------

    def _classify(self, word: str, table: OperatorTable) -> Token:
        if word == "(":
            return OpenParenToken()
        if word == ")":
            return CloseParenToken()
        if is_number_word(word):
            return NumberToken(value=float(word))

        definition = table.get(word)
        if definition is not None:
            return OperatorToken(definition=definition)

        raise MalformedExpression(f"Unrecognized word {word!r}")
