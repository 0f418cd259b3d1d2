from __future__ import annotations

import logging
import random as _rnd
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from generator import EmptyNumberPool, Equation, EquationGenerator, GenerationImpossible
from rendering import render_worksheet
from schemas.worksheets import EquationsResponse, WorksheetOptions

logger = logging.getLogger("sumrise-worksheets")

router = APIRouter(tags=["worksheets"])


def _generate(opts: WorksheetOptions) -> Tuple[bool, List[Equation], Optional[str]]:
    """
    Returns: (ok, equations, feedback)
    A bad configuration means "show nothing", never a 500.
    """
    rng = _rnd.Random(opts.seed) if opts.seed is not None else None
    try:
        gen = EquationGenerator(opts, rng=rng)
    except EmptyNumberPool as e:
        logger.warning(
            "empty number pool: range %d..%d, exclusions=%s",
            opts.min_number,
            opts.max_number,
            opts.exclusion_numbers,
        )
        return False, [], str(e)

    try:
        return True, gen.generate_equations(), None
    except GenerationImpossible as e:
        logger.warning("generation impossible for %s", opts.model_dump(exclude_none=True))
        return False, [], str(e)


@router.post("/equations", response_model=EquationsResponse)
def create_equations(opts: WorksheetOptions):
    ok, eqs, feedback = _generate(opts)
    items: List[Dict[str, Any]] = [eq.model_dump() for eq in eqs]
    return {"ok": ok, "total": len(items), "equations": items, "feedback": feedback}


@router.post("/worksheet", response_class=PlainTextResponse)
def create_worksheet(opts: WorksheetOptions):
    _, eqs, _ = _generate(opts)
    return render_worksheet(
        eqs,
        columns=opts.columns,
        layout=opts.equation_layout,
        show_answers=opts.show_answers,
        row_gap=opts.row_gap,
        column_gap=opts.column_gap,
    )
