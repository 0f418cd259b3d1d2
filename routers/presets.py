from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException

from presets import get_preset, list_presets
from schemas.worksheets import PresetOut

router = APIRouter(prefix="/presets", tags=["presets"])


@router.get("", response_model=List[PresetOut])
def all_presets():
    return [{"name": name, "options": get_preset(name)} for name in list_presets()]


@router.get("/{name}", response_model=PresetOut)
def preset_detail(name: str):
    p = get_preset(name)
    if p is None:
        raise HTTPException(status_code=404, detail="preset not found")
    return {"name": name, "options": p}
