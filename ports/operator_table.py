"""
Port: OperatorTableLoader
Odpowiedzialność: wczytanie deklaracji operatorów ze strumienia konfiguracji.
"""
from typing import IO, Protocol, runtime_checkable

from contracts import OperatorTable


@runtime_checkable
class OperatorTableLoader(Protocol):
    def load(self, stream: IO) -> OperatorTable:
        """
        Reads whitespace-separated quadruples `<symbol> <op> <priority> <flag>`
        until the stream is exhausted and returns an immutable OperatorTable.
        The stream is rewound before reading, so repeated calls on the same
        handle see the same declarations. Later declarations of a symbol
        overwrite earlier ones.
        Raises MalformedExpression for any invalid declaration; no partial
        table is ever returned.
        """
        ...
