import random

import pytest

from generator import (
    EmptyNumberPool,
    Equation,
    EquationGenerator,
    EquationOptions,
    GenerationImpossible,
    Operator,
    evaluate_answer,
    generate_equations,
    is_trivial,
    max_attempts_from_env,
)


class ScriptedPicker:
    """Hands back pre-chosen values, checking each one is a legal pick."""

    def __init__(self, values):
        self.values = list(values)

    def choice(self, seq):
        v = self.values.pop(0)
        assert v in seq
        return v


def _opts(**kw):
    base = dict(rows=4, columns=5, min_number=-20, max_number=20)
    base.update(kw)
    return EquationOptions(**base)


ALL_OPS = dict(use_addition=True, use_subtraction=True, use_multiplication=True, use_division=True)


def test_output_length_is_rows_times_columns():
    eqs = EquationGenerator(_opts(**ALL_OPS), rng=random.Random(1)).generate_equations()
    assert len(eqs) == 20
    assert all(isinstance(e, Equation) for e in eqs)


def test_answers_respect_threshold_and_are_never_trivial():
    for seed in range(20):
        eqs = EquationGenerator(_opts(**ALL_OPS), rng=random.Random(seed)).generate_equations()
        for e in eqs:
            assert abs(e.answer) >= 3
            assert e.answer not in (0, 1, -1)


def test_custom_threshold():
    eqs = EquationGenerator(
        _opts(use_addition=True, min_absolute_answer=15), rng=random.Random(3)
    ).generate_equations()
    assert all(abs(e.answer) >= 15 for e in eqs)


def test_subtraction_right_operand_never_negative():
    eqs = EquationGenerator(
        _opts(rows=10, use_subtraction=True), rng=random.Random(7)
    ).generate_equations()
    for e in eqs:
        assert e.operator == Operator.SUBTRACT
        assert e.right_operand >= 0
        assert e.left_operand >= e.right_operand
        assert e.answer == e.left_operand - e.right_operand


def test_division_is_exact_and_divisor_nonzero():
    eqs = EquationGenerator(
        _opts(rows=10, use_division=True), rng=random.Random(11)
    ).generate_equations()
    for e in eqs:
        assert e.operator == Operator.DIVIDE
        assert e.right_operand != 0
        assert e.left_operand % e.right_operand == 0
        assert isinstance(e.answer, int)
        assert e.answer * e.right_operand == e.left_operand


def test_no_operators_returns_empty_list():
    gen = EquationGenerator(_opts(rows=3, columns=9))
    assert gen.enabled_operators() == []
    assert gen.generate_equations() == []


def test_empty_pool_raises():
    with pytest.raises(EmptyNumberPool):
        EquationGenerator(_opts(min_number=5, max_number=5, exclusion_numbers=[5]))


def test_inverted_range_is_an_empty_pool():
    with pytest.raises(EmptyNumberPool):
        EquationGenerator(_opts(min_number=10, max_number=1, use_addition=True))


def test_exclusions_removed_from_pool():
    gen = EquationGenerator(_opts(min_number=-3, max_number=3, exclusion_numbers=[-1, 0, 1, 99]))
    assert gen.allowed_numbers == (-3, -2, 2, 3)


def test_single_addition_scenario():
    opts = EquationOptions(
        rows=1,
        columns=1,
        use_addition=True,
        min_number=-5,
        max_number=5,
        exclusion_numbers=[],
        min_absolute_answer=3,
    )
    for _ in range(200):
        eqs = generate_equations(opts)
        assert len(eqs) == 1
        e = eqs[0]
        assert e.operator == Operator.ADD
        assert -5 <= e.left_operand <= 5 and -5 <= e.right_operand <= 5
        assert abs(e.answer) >= 3
        assert e.answer not in (0, 1, -1)


def test_seeded_runs_are_reproducible():
    a = EquationGenerator(_opts(**ALL_OPS), rng=random.Random(42)).generate_equations()
    b = EquationGenerator(_opts(**ALL_OPS), rng=random.Random(42)).generate_equations()
    assert a == b


def test_repeated_calls_are_independent():
    gen = EquationGenerator(_opts(rows=10, **ALL_OPS), rng=random.Random(5))
    assert gen.generate_equations() != gen.generate_equations()


def test_scripted_rejection_then_accept():
    picker = ScriptedPicker(
        [
            Operator.ADD, 1, 1,  # 2 -> below threshold
            Operator.ADD, 5, 4,  # 9 -> kept
        ]
    )
    gen = EquationGenerator(
        _opts(rows=1, columns=1, min_number=1, max_number=5, use_addition=True), rng=picker
    )
    eqs = gen.generate_equations()
    assert eqs == [Equation(left_operand=5, right_operand=4, operator=Operator.ADD, answer=9)]
    assert picker.values == []


def test_subtract_orders_operands():
    gen = EquationGenerator(
        _opts(min_number=1, max_number=9), rng=ScriptedPicker([Operator.SUBTRACT, 2, 9])
    )
    e = gen.draw_candidate([Operator.SUBTRACT])
    assert (e.left_operand, e.right_operand, e.answer) == (9, 2, 7)


def test_divide_builds_multiple_of_divisor():
    gen = EquationGenerator(
        _opts(min_number=-4, max_number=4), rng=ScriptedPicker([Operator.DIVIDE, -3, 4])
    )
    e = gen.draw_candidate([Operator.DIVIDE])
    assert (e.left_operand, e.right_operand, e.answer) == (-12, -3, 4)


def test_divide_falls_back_when_pool_is_only_zero():
    gen = EquationGenerator(
        _opts(min_number=0, max_number=0), rng=ScriptedPicker([Operator.DIVIDE])
    )
    e = gen.draw_candidate([Operator.DIVIDE])
    assert (e.left_operand, e.right_operand, e.answer) == (0, 1, 0)


def test_low_threshold_still_rejects_zero_and_one():
    # pool {0, 1}: only 1 + 1 = 2 can pass
    eqs = EquationGenerator(
        _opts(min_number=0, max_number=1, use_addition=True, min_absolute_answer=0),
        rng=random.Random(9),
    ).generate_equations()
    assert len(eqs) == 20
    assert all(e.answer == 2 for e in eqs)


def test_impossible_configuration_hits_retry_cap():
    gen = EquationGenerator(
        _opts(min_number=-10, max_number=-1, use_subtraction=True), max_attempts=50
    )
    with pytest.raises(GenerationImpossible):
        gen.generate_equations()


def test_zero_only_pool_division_hits_retry_cap():
    gen = EquationGenerator(_opts(min_number=0, max_number=0, use_division=True), max_attempts=10)
    with pytest.raises(GenerationImpossible):
        gen.generate_equations()


def test_evaluate_answer():
    assert evaluate_answer(7, 3, Operator.ADD) == 10
    assert evaluate_answer(7, 3, Operator.SUBTRACT) == 4
    assert evaluate_answer(7, 3, Operator.MULTIPLY) == 21
    assert evaluate_answer(21, 3, Operator.DIVIDE) == 7
    assert evaluate_answer(7, 2, Operator.DIVIDE) == 3.5
    assert evaluate_answer(7, 0, Operator.DIVIDE) == 0


def test_is_trivial():
    def eq(a, b, op):
        return Equation(left_operand=a, right_operand=b, operator=op, answer=evaluate_answer(a, b, op))

    assert is_trivial(eq(1, 1, Operator.ADD), 3)
    assert not is_trivial(eq(2, 1, Operator.ADD), 3)
    assert is_trivial(eq(1, 0, Operator.ADD), 0)
    assert is_trivial(eq(-1, 0, Operator.ADD), 0)
    assert is_trivial(eq(3, -4, Operator.SUBTRACT), 3)
    assert not is_trivial(eq(-4, -7, Operator.ADD), 3)


def test_max_attempts_from_env():
    assert max_attempts_from_env(None) == 10000
    assert max_attempts_from_env("") == 10000
    assert max_attempts_from_env("250") == 250
    assert max_attempts_from_env("lots") == 10000
    assert max_attempts_from_env("0") == 10000
    assert max_attempts_from_env("-5") == 10000
