# services/worksheets/routers/health.py
from fastapi import APIRouter, HTTPException

from generator import DEFAULT_MAX_ATTEMPTS, EquationGenerator, EquationOptions
from presets import get_preset

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/generator")
def health_generator():
    opts = EquationOptions(**get_preset("default"))
    try:
        eqs = EquationGenerator(opts).generate_equations()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"generator_error: {type(e).__name__}: {e}")
    expected = opts.rows * opts.columns
    return {
        "ok": len(eqs) == expected,
        "generated": len(eqs),
        "expected": expected,
        "max_attempts": DEFAULT_MAX_ATTEMPTS,
    }
