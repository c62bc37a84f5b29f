import math

import pytest

from benchmark_suite import StandardBenchmarkSuite


@pytest.fixture
def suite():
    return StandardBenchmarkSuite()


def test_every_problem_parses(suite):
    for problem in suite.problems.values():
        assert problem.interval[0] < problem.interval[1]
        assert math.isfinite(suite.exact_value(problem))


def test_exact_values(suite):
    assert suite.exact_value(suite.problems["linear"]) == pytest.approx(0.5)
    assert suite.exact_value(suite.problems["circle_area"]) == pytest.approx(8 * math.pi / 3)
    assert suite.exact_value(suite.problems["sine_half_wave"]) == pytest.approx(2.0)


def test_single_benchmark_result(suite):
    result = suite.run_single_benchmark("quintic", order=4, grain=10, verbose=False)
    assert result["success"]
    assert result["abs_error"] < 1e-9
    assert result["evaluations_per_second"] > 0


def test_report_lists_problems(suite):
    assert "No benchmark results" in suite.generate_benchmark_report(save_to_file=False)
    suite.run_single_benchmark("linear", order=1, grain=100, verbose=False)
    report = suite.generate_benchmark_report(save_to_file=False)
    assert "linear" in report
    assert "order 5" in report


def test_unknown_problem(suite):
    with pytest.raises(ValueError):
        suite.run_single_benchmark("missing")
