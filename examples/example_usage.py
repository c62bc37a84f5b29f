import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import threading
import warnings

import numpy as np
from polish_quadrature import (
  parse, Integral, IntegralConfig, ApproxOrder, Grain, ParseError, EvaluationError,
  ReversedLimitsWarning, LogLevel, configure_logging
)


def show_tree(formula):
  """Parse a formula and print its arena and SymPy form"""
  tree = parse(formula)
  print(f"Formula: {formula}")
  print(f"Canonical: {tree.to_string()}")
  print(f"SymPy: {tree.to_sympy()}")
  print(f"Nodes: {tree.size()}, depth: {tree.depth()}")
  for index, node in enumerate(tree):
    children = f" -> {list(node.children)}" if node.children else ""
    print(f"  {index:3d} {node.kind.name:<8} {node.token(tree.variable)}{children}")
  return tree


def sample_values(tree):
  xs = np.linspace(1.5, 4.0, 6)
  values = tree.evaluate_many(xs)
  print("\nSampled values:")
  for x, value in zip(xs, values):
    print(f"  f({x:.2f}) = {value:.10f}")


def convergence_table(formula, interval, exact):
  """Absolute error of every order for growing grains"""
  print(f"\nConvergence for {formula} on {list(interval)} (exact = {exact:.12f})")
  grains = [10, 100, 1000]
  print("  order " + "".join(f"{grain:>14}" for grain in grains))
  integral = Integral(formula)
  for order in ApproxOrder:
    integral.set_order(order)
    errors = []
    for grain in grains:
      integral.set_grain(grain)
      errors.append(abs(integral.integrate(*interval) - exact))
    print(f"  {int(order):5d} " + "".join(f"{error:>14.3e}" for error in errors))


def error_handling():
  print("\nError handling:")
  for formula in ["(+ 1 2", "(+ 1 2))", "(- 1 2 3)", "(foo x)", "(+ (sin x)(cos x))", "(+ x 01)"]:
    try:
      parse(formula)
    except ParseError as e:
      print(f"  {formula!r:<24} {type(e).__name__}: {e}")

  try:
    Integral("(/ 1 x)", order=2, grain=100).integrate(0.0, 1.0)
  except EvaluationError as e:
    print(f"  integrating 1/x from 0: {type(e).__name__}: {e}")

  with warnings.catch_warnings(record=True) as caught:
    warnings.simplefilter("always", ReversedLimitsWarning)
    value = Integral("(+ x 0)", order=1, grain=1000).integrate(1.0, 0.0)
  print(f"  reversed limits gave {value:.6f} with {len(caught)} warning(s)")


def threaded_integration():
  config = IntegralConfig(workers=4, chunk_size=10000)
  integral = Integral("(exp (- 0 (sqr x)))", order=4, grain=Grain.FINE, config=config)
  cancel = threading.Event()
  value = integral.integrate(-3.0, 3.0, cancel_event=cancel)
  print(f"\nGaussian on [-3, 3], order 4, fine grain, {config.workers} threads: {value:.12f}")
  print(f"  sqrt(pi) * erf(3) = {np.sqrt(np.pi) * 0.9999779095030014:.12f}")


def main():
  configure_logging(LogLevel.MINIMAL)
  tree = show_tree("(+ (/ (* 2.3 x) (log x)) (sin x) 8)")
  sample_values(tree)
  convergence_table("(sin x)", (0.0, np.pi), 2.0)
  convergence_table("(* pi (sqr x))", (0.0, 2.0), 8.0 * np.pi / 3.0)
  error_handling()
  threaded_integration()


if __name__ == "__main__":
  main()
