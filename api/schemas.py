"""
schemas.py - Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from contracts import PrecedenceMode


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    expression: Optional[str] = None
    operators: str = ""                          # np. "a + 10 L m * 10 L"
    precedence: Optional[PrecedenceMode] = None  # None = z konfiguracji


class EvaluateResponse(BaseModel):
    value: Optional[float] = None  # None dla inf / nan (JSON ich nie obsługuje)
    display: str                   # repr wyniku, także "inf" / "nan"
    token_count: int


class ErrorResponse(BaseModel):
    detail: str = "malformed expression"
    reason: str


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
    precedence_mode: PrecedenceMode
