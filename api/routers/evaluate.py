"""
Router: POST /evaluate
Oblicza wyrażenie względem operatorów przesłanych w tym samym żądaniu.
"""
from __future__ import annotations

import io
import math

from fastapi import APIRouter, Depends

from api.dependencies import get_engine, get_settings
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse
from config import Settings
from engine import ExpressionEngine

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse, responses={422: {"model": ErrorResponse}})
async def evaluate(
    body: EvaluateRequest,
    engine: ExpressionEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
):
    if body.precedence is not None:
        engine = ExpressionEngine(settings=settings, precedence=body.precedence)

    result = engine.try_evaluate(body.expression, io.StringIO(body.operators))
    value = result.unwrap()

    return EvaluateResponse(
        value=value if math.isfinite(value) else None,
        display=repr(value),
        token_count=result.token_count,
    )
