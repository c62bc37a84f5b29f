import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from polish_quadrature import parse, evaluate, evaluate_many
from polish_quadrature.errors import (
    EvaluationError, DivisionByZeroError, NegativeSquareRootError, NegativeLogarithmError
)


def test_constant_sum_ignores_x():
    tree = parse("(+ 1 2)")
    for x in (-5.0, 0.0, 3.25, 1e6):
        assert evaluate(tree, x) == 3.0


def test_area_of_circle():
    tree = parse("(* pi (sqr x))")
    assert evaluate(tree, 2.0) == pytest.approx(4 * math.pi)
    assert tree(2.0) == evaluate(tree, 2.0)


def test_binary_operators_are_ordered():
    assert evaluate(parse("(- 10 4)"), 0) == 6.0
    assert evaluate(parse("(/ 7 2)"), 0) == 3.5
    assert evaluate(parse("(pow 2 10)"), 0) == 1024.0
    assert evaluate(parse("(pow x 0.5)"), 9.0) == pytest.approx(3.0)


def test_variadic_fold():
    assert evaluate(parse("(* x x x)"), 3.0) == 27.0
    assert evaluate(parse("(+ 1 2 3 4)"), 0.0) == 10.0
    assert evaluate(parse("(+ (* 2 x) (sqr x) -1)"), 2.0) == 7.0


def test_unary_operators_match_math():
    x = 0.7
    assert evaluate(parse("(sin x)"), x) == pytest.approx(math.sin(x))
    assert evaluate(parse("(cos x)"), x) == pytest.approx(math.cos(x))
    assert evaluate(parse("(tan x)"), x) == pytest.approx(math.tan(x))
    assert evaluate(parse("(cot x)"), x) == pytest.approx(1 / math.tan(x))
    assert evaluate(parse("(exp x)"), x) == pytest.approx(math.exp(x))
    assert evaluate(parse("(log x)"), x) == pytest.approx(math.log(x))
    assert evaluate(parse("(sqr x)"), x) == pytest.approx(x * x)


def test_mixed_formula():
    tree = parse("(+ (/ (* 2.3 x) (log x)) (sin x) 8)")
    x = 2.0
    expected = 2.3 * x / math.log(x) + math.sin(x) + 8
    assert evaluate(tree, x) == pytest.approx(expected)


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError) as excinfo:
        evaluate(parse("(/ 1 0)"), 0.0)
    assert excinfo.value.node_index == 0
    assert isinstance(excinfo.value, ZeroDivisionError)
    assert isinstance(excinfo.value, EvaluationError)


def test_negative_zero_divisor_gives_signed_infinity():
    assert evaluate(parse("(/ 1 x)"), -0.0) == -math.inf
    assert evaluate(parse("(/ 1 (* -1 0))"), 0.0) == -math.inf


def test_negative_zero_is_outside_sqrt_and_log_domains():
    with pytest.raises(NegativeSquareRootError):
        evaluate(parse("(sqrt (* -1 0))"), 0.0)
    with pytest.raises(NegativeLogarithmError):
        evaluate(parse("(log (* -1 0))"), 0.0)
    with pytest.raises(NegativeLogarithmError):
        evaluate(parse("(log x)"), -0.0)


def test_nan_passes_domain_checks():
    assert math.isnan(evaluate(parse("(sqrt x)"), math.nan))
    assert math.isnan(evaluate(parse("(log x)"), math.nan))
    assert math.isnan(evaluate(parse("(/ 1 x)"), math.nan))


def test_signed_zero_checks_on_arrays():
    with pytest.raises(NegativeSquareRootError):
        evaluate_many(parse("(sqrt x)"), [1.0, 0.0, -0.0])
    values = evaluate_many(parse("(/ 1 x)"), [2.0, -0.0])
    assert values[0] == 0.5
    assert values[1] == -math.inf


def test_square_root_domain():
    tree = parse("(sqrt x)")
    with pytest.raises(NegativeSquareRootError):
        evaluate(tree, -1.0)
    assert evaluate(tree, 4.0) == 2.0
    assert evaluate(tree, 0.0) == 0.0


def test_logarithm_domain():
    tree = parse("(log x)")
    with pytest.raises(NegativeLogarithmError):
        evaluate(tree, -1.0)
    assert evaluate(tree, 0.0) == -math.inf


def test_cotangent_at_zero_is_infinite():
    tree = parse("(cot x)")
    assert evaluate(tree, 0.0) == math.inf
    assert evaluate(tree, -0.0) == -math.inf


def test_non_finite_results_propagate():
    assert evaluate(parse("(exp x)"), 1000.0) == math.inf
    assert math.isnan(evaluate(parse("(pow x 0.5)"), -4.0))
    assert math.isnan(evaluate(parse("(- (exp x) (exp x))"), 1000.0))


def test_error_reports_failing_node():
    with pytest.raises(DivisionByZeroError) as excinfo:
        evaluate(parse("(+ 1 (/ x 0))"), 1.0)
    assert excinfo.value.node_index == 2


def test_leftmost_error_wins():
    with pytest.raises(DivisionByZeroError):
        evaluate(parse("(+ (/ 1 0) (sqrt -1))"), 0.0)
    with pytest.raises(NegativeSquareRootError):
        evaluate(parse("(+ (sqrt -1) (/ 1 0))"), 0.0)


def test_evaluation_is_repeatable():
    tree = parse("(+ (sin x) (sqr x))")
    first = [evaluate(tree, x) for x in (0.1, 0.2, 0.3)]
    second = [evaluate(tree, x) for x in (0.3, 0.2, 0.1)][::-1]
    assert first == second


def test_evaluate_many_matches_pointwise():
    tree = parse("(+ (/ (* 2.3 x) (log x)) (sin x) (cot x) 8)")
    xs = np.linspace(1.1, 3.0, 50)
    expected = np.array([evaluate(tree, x) for x in xs])
    np.testing.assert_allclose(evaluate_many(tree, xs), expected, rtol=1e-12)


def test_evaluate_many_keeps_shape():
    xs = np.arange(6.0).reshape(2, 3)
    result = evaluate_many(parse("(+ 1 2)"), xs)
    assert result.shape == (2, 3)
    assert np.all(result == 3.0)
    np.testing.assert_array_equal(parse("(* x 2)").evaluate_many(xs), xs * 2)


def test_evaluate_many_raises_when_any_point_fails():
    with pytest.raises(NegativeSquareRootError):
        evaluate_many(parse("(sqrt x)"), [4.0, 1.0, -1.0])
    with pytest.raises(DivisionByZeroError):
        evaluate_many(parse("(/ 1 x)"), [1.0, 0.0])


def test_concurrent_evaluation_of_one_tree():
    tree = parse("(* (exp (- 0 x)) (cos (* 3 x)))")
    xs = [i * 0.01 for i in range(500)]
    expected = [evaluate(tree, x) for x in xs]
    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(tree.evaluate, xs))
    assert results == expected
