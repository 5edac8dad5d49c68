#!/usr/bin/env python3
"""
opcalc.py - CLI narzędzie opcalc.

Operatory deklarowane są w pliku (--ops) albo w tekście (--ops-text),
np. "a + 10 L  m * 10 L". Konfiguracja domyślna: zmienne środowiskowe
z prefiksem OPCALC_ lub plik .env.

Podkomendy:
    eval    - oblicz wyrażenie
    table   - pokaż wczytaną tablicę operatorów
    tokens  - pokaż tokeny wyrażenia

Użycie:
    python opcalc.py eval --ops-text "a + 10 L m * 10 L" --expr "3 m 5 a -2"
    python opcalc.py eval --ops ops.txt --expr "1 a (2 a 3)" --precedence priority
    python opcalc.py table --ops ops.txt
    python opcalc.py tokens --ops ops.txt --expr "(1 a 2)"
"""
from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import IO, Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import Settings
from contracts import MalformedExpression, NumberToken, OperatorToken
from engine import ExpressionEngine


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _error(message: str) -> None:
    _console().print(f"[bold red]Błąd:[/bold red] {escape(message)}")


def _open_ops(args: argparse.Namespace) -> IO[str]:
    if args.ops_text is not None:
        return io.StringIO(args.ops_text)
    if args.ops:
        try:
            return open(args.ops, encoding="utf-8")
        except OSError as e:
            _error(f"Nie można odczytać pliku: {e}")
            sys.exit(1)
    return io.StringIO("")


def _read_expr(args: argparse.Namespace) -> str:
    if args.expr is not None:
        return args.expr
    return sys.stdin.read()


def _engine(args: argparse.Namespace) -> ExpressionEngine:
    return ExpressionEngine(settings=Settings(), precedence=getattr(args, "precedence", None))


def _print_operator_table(rows: list[Any]) -> None:
    table = Table(title=f"Operators [{len(rows)}]", box=box.ASCII)
    table.add_column("Symbol", no_wrap=True, style="bold cyan")
    table.add_column("Op", no_wrap=True)
    table.add_column("Priority", justify="right", no_wrap=True)
    table.add_column("Tier", justify="right", no_wrap=True)
    table.add_column("Assoc", no_wrap=True)
    for d in rows:
        table.add_row(
            escape(d.symbol),
            d.operation.value,
            str(d.priority),
            str(d.tier),
            "left" if d.left_associative else "right",
        )
    _console().print(table)


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> int:
    with _open_ops(args) as ops:
        result = _engine(args).try_evaluate(_read_expr(args), ops)
    if not result.ok:
        _error(result.error or "malformed expression")
        return 1
    _console().print(repr(result.value))
    return 0


def _table(args: argparse.Namespace) -> int:
    try:
        with _open_ops(args) as ops:
            table = _engine(args).load_table(ops)
    except MalformedExpression as exc:
        _error(exc.reason)
        return 1
    _print_operator_table(list(table.definitions()))
    return 0


def _tokens(args: argparse.Namespace) -> int:
    try:
        with _open_ops(args) as ops:
            tokens = _engine(args).tokenize(_read_expr(args), ops)
    except MalformedExpression as exc:
        _error(exc.reason)
        return 1

    table = Table(title=f"Tokens [{len(tokens)}]", box=box.ASCII)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Kind", no_wrap=True, style="cyan")
    table.add_column("Value")
    for i, tok in enumerate(tokens):
        if isinstance(tok, NumberToken):
            value = repr(tok.value)
        elif isinstance(tok, OperatorToken):
            value = f"{escape(tok.definition.symbol)} ({tok.definition.operation.value})"
        else:
            value = "(" if tok.kind == "open_paren" else ")"
        table.add_row(str(i), tok.kind, value)
    _console().print(table)
    return 0


# -- main ------------------------------------------------------------------

def _add_ops_arguments(p: argparse.ArgumentParser) -> None:
    group = p.add_mutually_exclusive_group()
    group.add_argument("--ops", "-o", help="Plik z deklaracjami operatorów")
    group.add_argument("--ops-text", help="Deklaracje operatorów jako tekst")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opcalc",
        description="opcalc - wyrażenia z operatorami deklarowanymi w czasie wywołania",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Logi DEBUG")
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Oblicz wyrażenie")
    _add_ops_arguments(p)
    p.add_argument("--expr", "-e", help="Wyrażenie (lub stdin)")
    p.add_argument("--precedence", choices=["tier", "priority"],
                   help="Źródło siły wiązania (domyślnie z OPCALC_PRECEDENCE_MODE)")

    # table
    p = sub.add_parser("table", help="Pokaż tablicę operatorów")
    _add_ops_arguments(p)

    # tokens
    p = sub.add_parser("tokens", help="Pokaż tokeny wyrażenia")
    _add_ops_arguments(p)
    p.add_argument("--expr", "-e", help="Wyrażenie (lub stdin)")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings()
    logging.basicConfig(level="DEBUG" if args.verbose else settings.log_level.upper())

    commands = {
        "eval":   _eval,
        "table":  _table,
        "tokens": _tokens,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
