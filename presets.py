# Named option sets for the worksheet builder.
# "default" is what the page shows on first load.

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {
        "rows": 6,
        "columns": 5,
        "use_addition": True,
        "use_subtraction": True,
        "use_multiplication": False,
        "use_division": False,
        "equation_layout": "stacked",
        "show_answers": True,
        "font_family": "Arial",
        "font_size": 17,
        "min_number": -50,
        "max_number": 50,
        "exclusion_numbers": [-2, -1, 0, 1, 2],
        "row_gap": 4,  # rem
        "column_gap": 6,  # rem
        "min_absolute_answer": 5,
    },
    "times-tables": {
        "rows": 5,
        "columns": 4,
        "use_addition": False,
        "use_subtraction": False,
        "use_multiplication": True,
        "use_division": True,
        "equation_layout": "inline",
        "show_answers": False,
        "font_family": "Arial",
        "font_size": 17,
        "min_number": 1,
        "max_number": 12,
        "exclusion_numbers": [],
        "row_gap": 2,
        "column_gap": 4,
        "min_absolute_answer": 3,
    },
}


def list_presets() -> List[str]:
    return sorted(PRESETS)


def get_preset(name: str) -> Optional[Dict[str, Any]]:
    # callers may mutate the result
    p = PRESETS.get(name)
    return copy.deepcopy(p) if p is not None else None
