# services/worksheets/rendering.py
# Plain-text preview of a worksheet: the same grid the browser prints,
# minus fonts and CSS.

from __future__ import annotations

from typing import List, Sequence

from generator import Equation, Operator

EMPTY_MESSAGE = "No equations to display. Adjust the options!"
BLANK = "_____"

_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}


def operator_symbol(op: Operator) -> str:
    return _SYMBOLS.get(op, "?")


def _answer_str(eq: Equation) -> str:
    ans = eq.answer
    if isinstance(ans, float) and ans.is_integer():
        return str(int(ans))
    return str(ans)


def format_inline(eq: Equation, show_answers: bool = True) -> str:
    answer = _answer_str(eq) if show_answers else BLANK
    return f"{eq.left_operand} {operator_symbol(eq.operator)} {eq.right_operand} = {answer}"


def format_stacked(eq: Equation, show_answers: bool = True) -> List[str]:
    top = str(eq.left_operand)
    middle = f"{operator_symbol(eq.operator)} {eq.right_operand}"
    bottom = _answer_str(eq) if show_answers else ""
    width = max(len(top), len(middle), len(bottom))
    return [
        top.rjust(width),
        middle.rjust(width),
        "-" * width,
        bottom.rjust(width),
    ]


def render_worksheet(
    equations: Sequence[Equation],
    columns: int,
    layout: str = "stacked",
    show_answers: bool = True,
    row_gap: float = 1,
    column_gap: float = 4,
) -> str:
    if columns < 1:
        raise ValueError("columns must be >= 1")
    if not equations:
        return EMPTY_MESSAGE

    if layout == "stacked":
        cells = [format_stacked(eq, show_answers) for eq in equations]
    elif layout == "inline":
        cells = [[format_inline(eq, show_answers)] for eq in equations]
    else:
        raise ValueError(f"unknown layout: {layout!r}")

    # one shared width keeps the columns aligned across rows
    cell_width = max(len(line) for cell in cells for line in cell)
    spacer = " " * max(0, int(round(column_gap)))
    blank_lines = max(0, int(round(row_gap)))

    blocks: List[str] = []
    for start in range(0, len(cells), columns):
        row = cells[start : start + columns]
        height = max(len(c) for c in row)
        lines = []
        for i in range(height):
            parts = [(c[i] if i < len(c) else "").rjust(cell_width) for c in row]
            lines.append(spacer.join(parts).rstrip())
        blocks.append("\n".join(lines))

    return ("\n" * (blank_lines + 1)).join(blocks) + "\n"
