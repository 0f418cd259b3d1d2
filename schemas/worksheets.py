# services/worksheets/schemas/worksheets.py
from __future__ import annotations

import re
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from generator import EquationOptions, Operator

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# Request limits for the shared server; the browser app had none.
MAX_ROWS = 100
MAX_COLUMNS = 100
MAX_RANGE_WIDTH = 10_000


def parse_exclusion_text(text: str) -> List[int]:
    """
    "-2, -1, 0, x, 4" -> [-2, -1, 0, 4]
    Tokens are split on commas; anything without a leading integer is dropped.
    """
    out: List[int] = []
    for token in text.split(","):
        m = _LEADING_INT_RE.match(token)
        if m:
            out.append(int(m.group(1)))
    return out


# ---------- Options ----------


class WorksheetOptions(EquationOptions):
    rows: int = Field(ge=1, le=MAX_ROWS)
    columns: int = Field(ge=1, le=MAX_COLUMNS)
    exclusion_numbers: Optional[List[int]] = Field(default=None, max_length=MAX_RANGE_WIDTH + 1)
    equation_layout: Literal["stacked", "inline"] = "stacked"
    show_answers: bool = True
    font_family: str = "Arial"
    font_size: int = Field(default=17, ge=1)
    row_gap: float = Field(default=4, ge=0)
    column_gap: float = Field(default=6, ge=0)
    # same seed + same options -> same equations, so an answer key matches its sheet
    seed: Optional[int] = None

    @field_validator("exclusion_numbers", mode="before")
    @classmethod
    def _split_exclusion_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_exclusion_text(v)
        return v

    @model_validator(mode="after")
    def _check_range_width(self) -> "WorksheetOptions":
        if self.max_number - self.min_number > MAX_RANGE_WIDTH:
            raise ValueError(f"max_number - min_number must be <= {MAX_RANGE_WIDTH}")
        return self


# ---------- Equations ----------


class EquationOut(BaseModel):
    left_operand: int
    right_operand: int
    operator: Operator
    answer: Union[int, float]


class EquationsResponse(BaseModel):
    ok: bool
    total: int
    equations: List[EquationOut]
    feedback: Optional[str] = None


# ---------- Presets ----------


class PresetOut(BaseModel):
    name: str
    options: WorksheetOptions
