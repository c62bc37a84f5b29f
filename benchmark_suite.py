#!/usr/bin/env python3
"""
Newton-Cotes Quadrature Benchmark Suite

Integrates a set of prefix formulas with known closed-form integrals over
every approximation order and grain, and reports the absolute error and the
throughput (evaluations per second) of each run.

Exact values come from SymPy, integrating the same tree the quadrature uses.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import numpy as np
import sympy as sp

from polish_quadrature import ApproxOrder, Grain, Integral, parse
from polish_quadrature.errors import EvaluationError


@dataclass
class BenchmarkProblem:
    """Container for one definite integral with a closed-form value."""
    name: str
    description: str
    formula: str
    interval: Tuple[float, float]
    category: str  # 'polynomial', 'trigonometric', 'transcendental'
    variable: str = 'x'


class StandardBenchmarkSuite:
    """
    Accuracy and throughput benchmarks for the composite Newton-Cotes rules.
    """

    def __init__(self):
        self.problems: Dict[str, BenchmarkProblem] = {}
        self.results: List[Dict] = []
        self._exact_cache: Dict[str, float] = {}
        self._create_benchmark_problems()

    def _create_benchmark_problems(self):
        problems = [
            BenchmarkProblem("linear", "Identity on the unit interval",
                             "(+ x 0)", (0.0, 1.0), "polynomial"),
            BenchmarkProblem("cubic", "x^3 - 2x + 1",
                             "(+ (pow x 3) (* -2 x) 1)", (-1.0, 2.0), "polynomial"),
            BenchmarkProblem("quintic", "x^5, exact for order 4 and above",
                             "(pow x 5)", (0.0, 2.0), "polynomial"),
            BenchmarkProblem("sine_half_wave", "sin(x) over one half period",
                             "(sin x)", (0.0, np.pi), "trigonometric"),
            BenchmarkProblem("circle_area", "pi * x^2 (area of a disc of radius x)",
                             "(* pi (sqr x))", (0.0, 2.0), "polynomial"),
            BenchmarkProblem("damped_cosine", "exp(-x) cos(3x)",
                             "(* (exp (- 0 x)) (cos (* 3 x)))", (0.0, 5.0), "transcendental"),
            BenchmarkProblem("logarithm", "log(x) on [1, e]",
                             "(log x)", (1.0, float(np.e)), "transcendental"),
            BenchmarkProblem("square_root", "sqrt(x) with an infinite slope at 0",
                             "(sqrt x)", (0.0, 4.0), "transcendental"),
            BenchmarkProblem("gaussian", "exp(-x^2)",
                             "(exp (- 0 (sqr x)))", (-3.0, 3.0), "transcendental"),
        ]
        for problem in problems:
            self.problems[problem.name] = problem

    def exact_value(self, problem: BenchmarkProblem) -> float:
        if problem.name not in self._exact_cache:
            tree = parse(problem.formula, problem.variable)
            symbol = sp.Symbol(problem.variable)
            # Limits are the exact binary values the quadrature sees
            lower, upper = (sp.Float(bound, 30) for bound in problem.interval)
            exact = sp.integrate(tree.to_sympy(), (symbol, lower, upper))
            self._exact_cache[problem.name] = float(sp.N(exact, 30))
        return self._exact_cache[problem.name]

    def run_single_benchmark(self, problem_key: str, order: int = 2,
                             grain: int = Grain.COARSE, verbose: bool = True) -> Dict:
        """Integrate one problem with one rule configuration."""
        if problem_key not in self.problems:
            raise ValueError(f"Problem '{problem_key}' not found. Available: {list(self.problems.keys())}")

        problem = self.problems[problem_key]
        integral = Integral(problem.formula, order=order, grain=grain, variable=problem.variable)
        exact = self.exact_value(problem)

        start_time = time.perf_counter()
        try:
            approx = integral.integrate(*problem.interval)
            elapsed_time = time.perf_counter() - start_time
            error = abs(approx - exact)
            result = {
                'problem_key': problem_key,
                'category': problem.category,
                'formula': problem.formula,
                'order': int(order),
                'grain': int(grain),
                'success': True,
                'approximation': approx,
                'exact': exact,
                'abs_error': error,
                'elapsed_time': elapsed_time,
                'evaluations_per_second': integral.config.evaluations / max(elapsed_time, 1e-12),
            }
        except EvaluationError as e:
            elapsed_time = time.perf_counter() - start_time
            result = {
                'problem_key': problem_key,
                'category': problem.category,
                'formula': problem.formula,
                'order': int(order),
                'grain': int(grain),
                'success': False,
                'error': str(e),
                'elapsed_time': elapsed_time,
            }

        if verbose:
            if result['success']:
                print(f"  {problem_key:<16} order={order} grain={int(grain):<7} "
                      f"error={result['abs_error']:.3e}  time={elapsed_time:.3f}s")
            else:
                print(f"  {problem_key:<16} order={order} grain={int(grain):<7} FAILED: {result['error']}")

        self.results.append(result)
        return result

    def run_benchmark_suite(self, categories: Optional[List[str]] = None,
                            orders: Optional[List[int]] = None,
                            grains: Optional[List[int]] = None) -> List[Dict]:
        """Run every selected problem for every order and grain."""
        orders = orders if orders is not None else [int(order) for order in ApproxOrder]
        grains = grains if grains is not None else [Grain.COARSE, Grain.MEDIUM]

        keys = [key for key, problem in self.problems.items()
                if not categories or problem.category in categories]

        print(f"RUNNING QUADRATURE BENCHMARK SUITE")
        print(f"Problems: {len(keys)}, orders: {orders}, grains: {[int(g) for g in grains]}")

        results = []
        for key in keys:
            for grain in grains:
                for order in orders:
                    results.append(self.run_single_benchmark(key, order, grain))
        return results

    def generate_benchmark_report(self, save_to_file: bool = True) -> str:
        if not self.results:
            return "No benchmark results available. Run some benchmarks first."

        successful = [r for r in self.results if r['success']]
        report = f"""
NEWTON-COTES QUADRATURE BENCHMARK REPORT
{'='*80}
Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}

Runs: {len(self.results)}, successful: {len(successful)}

"""
        report += f"{'problem':<16} {'grain':>7} " + " ".join(f"{'order ' + str(int(o)):>11}" for o in ApproxOrder) + "\n"
        table: Dict[Tuple[str, int], Dict[int, float]] = {}
        for r in successful:
            table.setdefault((r['problem_key'], r['grain']), {})[r['order']] = r['abs_error']
        for (key, grain), errors in table.items():
            cells = " ".join(f"{errors[o]:>11.3e}" if o in errors else f"{'-':>11}" for o in ApproxOrder)
            report += f"{key:<16} {grain:>7} {cells}\n"

        if successful:
            throughput = np.median([r['evaluations_per_second'] for r in successful])
            report += f"\nMedian throughput: {throughput:,.0f} evaluations/s\n"

        if save_to_file:
            filename = f"benchmark_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
            with open(filename, 'w', encoding='utf-8') as f:
                f.write(report)
            print(f"\nReport saved to: {filename}")

        return report

    def plot_convergence(self, problem_key: str, path: str = "convergence.png",
                         grains: Optional[List[int]] = None) -> str:
        """Log-log plot of the error against the grain for every order."""
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        grains = grains or [10, 30, 100, 300, 1000, 3000]
        fig, ax = plt.subplots(figsize=(7, 5))
        for order in ApproxOrder:
            errors = [self.run_single_benchmark(problem_key, int(order), grain, verbose=False).get('abs_error', np.nan)
                      for grain in grains]
            # Exact results cannot be drawn on a log axis
            errors = [e if e and e > 0 else np.nan for e in errors]
            ax.loglog(grains, errors, marker='o', label=f"order {int(order)}")
        ax.set_xlabel("grain (sub-intervals)")
        ax.set_ylabel("absolute error")
        ax.set_title(f"Convergence: {self.problems[problem_key].formula}")
        ax.legend()
        fig.tight_layout()
        fig.savefig(path)
        plt.close(fig)
        return path


def main():
    suite = StandardBenchmarkSuite()
    suite.run_benchmark_suite()
    print(suite.generate_benchmark_report(save_to_file=False))


if __name__ == "__main__":
    main()
