#!/usr/bin/env python3
"""
Quick Benchmark Runner

A simpler interface to run individual benchmark problems or small subsets.
"""

from benchmark_suite import StandardBenchmarkSuite
from polish_quadrature import ApproxOrder, Grain
import sys


def run_quick_test():
    """Simpson's rule on the easiest problems; checks the results are accurate."""
    suite = StandardBenchmarkSuite()

    quick_problems = ['linear', 'sine_half_wave']

    print("QUICK BENCHMARK TEST")
    print("=" * 60)

    passed = 0
    for problem_key in quick_problems:
        result = suite.run_single_benchmark(problem_key, order=2, grain=Grain.COARSE)
        if result['success'] and result['abs_error'] < 1e-9:
            print(f"PASSED {problem_key} (error = {result['abs_error']:.3e})")
            passed += 1
        else:
            print(f"FAILED {problem_key} ({result.get('abs_error', result.get('error'))})")

    print("=" * 60)
    print(f"{passed}/{len(quick_problems)} quick problems passed")
    return passed == len(quick_problems)


def run_orders(problem_key: str):
    """Every order at the coarse and medium grains for one problem."""
    suite = StandardBenchmarkSuite()

    if problem_key not in suite.problems:
        print(f"Problem '{problem_key}' not found!")
        print(f"Available problems: {list(suite.problems.keys())}")
        return

    problem = suite.problems[problem_key]
    print(f"RUNNING: {problem_key}  {problem.formula} on {list(problem.interval)}")
    print(f"Exact value: {suite.exact_value(problem)!r}")
    print("=" * 60)
    for grain in (Grain.COARSE, Grain.MEDIUM):
        for order in ApproxOrder:
            suite.run_single_benchmark(problem_key, int(order), grain)
    print(suite.generate_benchmark_report(save_to_file=False))


def list_problems():
    suite = StandardBenchmarkSuite()

    print("AVAILABLE BENCHMARK PROBLEMS")
    print("=" * 80)
    for key, problem in suite.problems.items():
        print(f"  {key:<16} [{problem.category}] {problem.formula} on {list(problem.interval)}")
        print(f"     {problem.description}")


def main():
    if len(sys.argv) == 1:
        print("NEWTON-COTES BENCHMARK RUNNER")
        print("=" * 50)
        print("Usage:")
        print("  python quick_benchmark.py quick        # Quick accuracy check")
        print("  python quick_benchmark.py all          # Every problem, order and grain")
        print("  python quick_benchmark.py list         # List all available problems")
        print("  python quick_benchmark.py <problem>    # All orders for one problem")
        return

    command = sys.argv[1].lower()

    if command == 'quick':
        sys.exit(0 if run_quick_test() else 1)
    elif command == 'all':
        suite = StandardBenchmarkSuite()
        suite.run_benchmark_suite()
        print(suite.generate_benchmark_report(save_to_file=False))
    elif command == 'list':
        list_problems()
    else:
        run_orders(command)


if __name__ == "__main__":
    main()
