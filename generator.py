# services/worksheets/generator.py

from __future__ import annotations

import logging
import os
import random as _rnd
from enum import Enum
from typing import List, Optional, Protocol, Sequence, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("sumrise-worksheets")

T = TypeVar("T")

DEFAULT_MIN_ABSOLUTE_ANSWER = 3

_FALLBACK_MAX_ATTEMPTS = 10000


def max_attempts_from_env(raw: Optional[str]) -> int:
    """
    Parse WORKSHEET_MAX_ATTEMPTS. Missing, non-numeric or < 1 values fall back
    to the built-in cap instead of breaking the import.
    """
    if raw is None or not raw.strip():
        return _FALLBACK_MAX_ATTEMPTS
    try:
        n = int(raw)
    except ValueError:
        logger.warning("ignoring non-numeric WORKSHEET_MAX_ATTEMPTS=%r", raw)
        return _FALLBACK_MAX_ATTEMPTS
    if n < 1:
        logger.warning("ignoring WORKSHEET_MAX_ATTEMPTS=%d (must be >= 1)", n)
        return _FALLBACK_MAX_ATTEMPTS
    return n


# Consecutive rejected candidates allowed for one slot before giving up.
# Pass max_attempts=None to EquationGenerator to retry forever.
DEFAULT_MAX_ATTEMPTS: int = max_attempts_from_env(os.getenv("WORKSHEET_MAX_ATTEMPTS"))


# --- Errors ----------------------------------------------------------------------


class ConfigurationError(ValueError):
    pass


class EmptyNumberPool(ConfigurationError):
    pass


class GenerationImpossible(RuntimeError):
    pass


# --- Models ----------------------------------------------------------------------


class Operator(str, Enum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"


class Equation(BaseModel):
    model_config = ConfigDict(frozen=True)
    left_operand: int
    right_operand: int
    operator: Operator
    answer: Union[int, float]


class EquationOptions(BaseModel):
    rows: int = Field(ge=1)
    columns: int = Field(ge=1)
    use_addition: bool = False
    use_subtraction: bool = False
    use_multiplication: bool = False
    use_division: bool = False
    min_number: int
    max_number: int
    exclusion_numbers: Optional[List[int]] = None
    min_absolute_answer: Optional[int] = None


class NumberPicker(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


# --- Arithmetic ------------------------------------------------------------------


def evaluate_answer(a: int, b: int, op: Operator) -> Union[int, float]:
    if op == Operator.ADD:
        return a + b
    if op == Operator.SUBTRACT:
        return a - b
    if op == Operator.MULTIPLY:
        return a * b
    if op == Operator.DIVIDE:
        # operands are built so this never triggers
        if b == 0:
            return 0
        if a % b == 0:
            return a // b
        return a / b
    raise ValueError(f"unknown operator: {op!r}")


def is_trivial(eq: Equation, threshold: int) -> bool:
    """
    True when the candidate must be discarded:
      - |answer| below the threshold,
      - answer of 0 or +-1 (checked on its own so thresholds < 2 still reject them),
      - subtracting a negative number.
    """
    if abs(eq.answer) < threshold:
        return True
    if eq.answer == 0 or abs(eq.answer) == 1:
        return True
    if eq.operator == Operator.SUBTRACT and eq.right_operand < 0:
        return True
    return False


# --- Generator -------------------------------------------------------------------


class EquationGenerator:
    def __init__(
        self,
        options: EquationOptions,
        rng: Optional[NumberPicker] = None,
        max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self.options = options
        self.max_attempts = max_attempts
        self._rng: NumberPicker = rng if rng is not None else _rnd.Random()

        excluded = set(options.exclusion_numbers or [])
        self._allowed: tuple[int, ...] = tuple(
            n for n in range(options.min_number, options.max_number + 1) if n not in excluded
        )
        if not self._allowed:
            raise EmptyNumberPool("No numbers available after applying exclusions.")
        self._non_zero: tuple[int, ...] = tuple(n for n in self._allowed if n != 0)

    @property
    def allowed_numbers(self) -> tuple[int, ...]:
        return self._allowed

    def enabled_operators(self) -> List[Operator]:
        o = self.options
        flags = (
            (o.use_addition, Operator.ADD),
            (o.use_subtraction, Operator.SUBTRACT),
            (o.use_multiplication, Operator.MULTIPLY),
            (o.use_division, Operator.DIVIDE),
        )
        return [op for enabled, op in flags if enabled]

    def _pick(self) -> int:
        return self._rng.choice(self._allowed)

    def draw_candidate(self, operators: Sequence[Operator]) -> Equation:
        op = self._rng.choice(operators)

        if op == Operator.SUBTRACT:
            n1, n2 = self._pick(), self._pick()
            a, b = max(n1, n2), min(n1, n2)
        elif op == Operator.DIVIDE:
            if not self._non_zero:
                a, b = 0, 1
            else:
                b = self._rng.choice(self._non_zero)
                factor = self._pick()
                a = factor * b
        else:
            a, b = self._pick(), self._pick()

        return Equation(
            left_operand=a, right_operand=b, operator=op, answer=evaluate_answer(a, b, op)
        )

    def generate_equations(self) -> List[Equation]:
        operators = self.enabled_operators()
        if not operators:
            return []

        threshold = self.options.min_absolute_answer
        if threshold is None:
            threshold = DEFAULT_MIN_ABSOLUTE_ANSWER
        total = self.options.rows * self.options.columns

        equations: List[Equation] = []
        misses = 0
        while len(equations) < total:
            eq = self.draw_candidate(operators)
            if is_trivial(eq, threshold):
                misses += 1
                if self.max_attempts is not None and misses >= self.max_attempts:
                    logger.warning(
                        "gave up after %d rejected candidates (%d/%d equations)",
                        misses,
                        len(equations),
                        total,
                    )
                    raise GenerationImpossible(
                        f"No acceptable equation found after {misses} attempts; "
                        "widen the number range or lower the minimum answer."
                    )
                continue
            misses = 0
            equations.append(eq)

        return equations


# Public API
def generate_equations(
    options: EquationOptions, rng: Optional[NumberPicker] = None
) -> List[Equation]:
    return EquationGenerator(options, rng=rng).generate_equations()
