"""
Closed Newton-Cotes composite integration of prefix formulas.

The interval is cut into `grain` sub-intervals; on each one the rule of the
chosen order samples `order + 1` equally spaced points (one point for order
0) and adds their weighted values to a running sum, which is scaled once at
the end. Points are evaluated in vectorized batches of sub-intervals, and the
running sum is accumulated in the same order a point-by-point loop would use.
"""

import threading
import warnings
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, Optional, Tuple, Union

import numba
import numpy as np

from .config import ApproxOrder, Grain, IntegralConfig
from .errors import EvaluationError, IntegrationCancelled, ReversedLimitsWarning
from .evaluator import evaluate, evaluate_many
from .expression_tree import ExpressionTree
from .logging_system import LogLevel, get_logger, log_debug, log_info, log_progress, log_warning
from .parser import parse

# Weight rows of the closed rules, indexed by order
NEWTON_COTES_WEIGHTS: Tuple[np.ndarray, ...] = (
    np.array([1.0]),
    np.array([1.0, 1.0]),
    np.array([1.0, 4.0, 1.0]),
    np.array([1.0, 3.0, 3.0, 1.0]),
    np.array([7.0, 32.0, 12.0, 32.0, 7.0]),
    np.array([19.0, 75.0, 50.0, 50.0, 75.0, 19.0]),
)

COEFFICIENT_SUMS: Tuple[float, ...] = (1.0, 2.0, 6.0, 8.0, 90.0, 288.0)


@numba.njit(cache=True)
def _accumulate(values, weights, total):
    # Row-major order matches the sub-interval / sample-point loop nesting
    for i in range(values.shape[0]):
        for j in range(values.shape[1]):
            total += weights[j] * values[i, j]
    return total


def compute_step(x_from: float, x_to: float, grain: int) -> Tuple[float, bool]:
    """
    Sub-interval width and whether the limits were given in descending order.

    Descending limits still produce a positive width; integration then walks
    forward from `x_from` with it.
    """
    if x_from > x_to:
        return (x_from - x_to) / grain, True
    return (x_to - x_from) / grain, False


def rule_parameters(order: int, step: float) -> Tuple[float, float]:
    """(delta, normalizer): spacing of sample points and final scale factor"""
    if order == 0:
        delta = step
        return delta, delta / COEFFICIENT_SUMS[0]
    delta = step / order
    return delta, (order * delta) / COEFFICIENT_SUMS[order]


def batch_starts(x_from: float, step: float, grain: int, chunk_size: int) -> Iterator[np.ndarray]:
    """
    Sub-interval starts, one array of at most `chunk_size` per batch.

    The cumulative sum carries the last start into the next batch, so the
    starts round exactly as a sequential `x += step` would.
    """
    carry = x_from
    for first in range(0, grain, chunk_size):
        increments = np.full(min(chunk_size, grain - first), step, dtype=np.float64)
        increments[0] = carry
        starts = np.cumsum(increments)
        carry = starts[-1] + step
        yield starts


def _raise_first_failure(tree: ExpressionTree, points: np.ndarray):
    for x in points.ravel():
        evaluate(tree, x)


def _evaluate_batch(tree: ExpressionTree, starts: np.ndarray, offsets: np.ndarray,
                    cancel_event: Optional[threading.Event]) -> np.ndarray:
    if cancel_event is not None and cancel_event.is_set():
        raise IntegrationCancelled("Integration cancelled")
    points = starts[:, None] + offsets[None, :]
    try:
        return evaluate_many(tree, points)
    except EvaluationError:
        # Replay point by point so the error of the first failing point wins
        _raise_first_failure(tree, points)
        raise


def integrate(tree: ExpressionTree, x_from: float, x_to: float,
              order: Union[ApproxOrder, int] = ApproxOrder.ORDER_2,
              grain: Union[Grain, int] = Grain.COARSE,
              chunk_size: int = 8192, workers: int = 1,
              cancel_event: Optional[threading.Event] = None) -> float:
    """
    Integrate `tree` over [x_from, x_to] with the composite Newton-Cotes rule.

    Args:
        tree: Parsed formula
        x_from, x_to: Interval limits; descending limits trigger a
            ReversedLimitsWarning and integrate forward from `x_from`
        order: Rule order 0-5
        grain: Number of sub-intervals
        chunk_size: Sub-intervals evaluated per vectorized batch
        workers: Threads evaluating batches concurrently
        cancel_event: Checked before every batch; raises IntegrationCancelled once set

    Returns:
        Approximate integral

    Raises:
        EvaluationError: first domain error met, in sampling order
    """
    config = IntegralConfig(order=order, grain=grain, chunk_size=chunk_size, workers=workers)
    return _integrate(tree, float(x_from), float(x_to), config, cancel_event)


def _integrate(tree: ExpressionTree, x_from: float, x_to: float, config: IntegralConfig,
               cancel_event: Optional[threading.Event] = None) -> float:
    order = int(config.order)
    grain = config.grain

    step, reversed_limits = compute_step(x_from, x_to, grain)
    if reversed_limits:
        message = (f"Incorrect interval limits: Limits are swapped "
                   f"({x_from} > {x_to}); integrating forward from {x_from}")
        log_warning(message)
        warnings.warn(message, ReversedLimitsWarning, stacklevel=3)

    delta, normalizer = rule_parameters(order, step)
    weights = NEWTON_COTES_WEIGHTS[order]
    offsets = np.arange(order + 1, dtype=np.float64) * delta
    batch_count = -(-grain // config.chunk_size)
    batches = batch_starts(x_from, step, grain, config.chunk_size)

    log_info(f"Integrating {tree.formula} on [{x_from}, {x_to}]: order {order}, "
             f"grain {grain}, {batch_count} batches", LogLevel.DETAILED)

    if config.workers == 1 or batch_count == 1:
        total = 0.0
        for number, starts in enumerate(batches, 1):
            values = _evaluate_batch(tree, starts, offsets, cancel_event)
            total = _accumulate(values, weights, total)
            log_progress(f"batch {number}/{batch_count}")
    else:
        total = _integrate_concurrently(tree, batches, batch_count, offsets, weights,
                                        config.workers, cancel_event)

    result = float(total * normalizer)
    get_logger().result_summary({
        'formula': tree.formula,
        'interval': f"[{x_from}, {x_to}]",
        'order': order,
        'grain': grain,
        'evaluations': config.evaluations,
        'integral': result,
    })
    return result


def _integrate_concurrently(tree, batches, batch_count, offsets, weights, workers, cancel_event):
    def run(starts):
        values = _evaluate_batch(tree, starts, offsets, cancel_event)
        return _accumulate(values, weights, 0.0)

    log_debug(f"Evaluating {batch_count} batches on {workers} threads")
    executor = ThreadPoolExecutor(max_workers=workers)
    # At most two batches per thread are in flight at once
    pending = deque()
    total = 0.0
    number = 0
    try:
        for starts in batches:
            pending.append(executor.submit(run, starts))
            if len(pending) < 2 * workers:
                continue
            # Collect in batch order so the earliest failing batch decides the error
            total += pending.popleft().result()
            number += 1
            log_progress(f"batch {number}/{batch_count}")
        while pending:
            total += pending.popleft().result()
            number += 1
            log_progress(f"batch {number}/{batch_count}")
        return total
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


class Integral:
    """
    Reusable integration of one formula with a fixed rule configuration.

    The formula, the order and the grain can each be replaced as a whole;
    the parsed tree itself is never modified.
    """

    def __init__(self, function: Union[ExpressionTree, str],
                 order: Optional[Union[ApproxOrder, int, str]] = None,
                 grain: Optional[Union[Grain, int, str]] = None,
                 variable: str = 'x', config: Optional[IntegralConfig] = None):
        self._function = _as_tree(function, variable)
        config = config if config is not None else IntegralConfig()
        if order is not None:
            config = config.with_order(order)
        if grain is not None:
            config = config.with_grain(grain)
        self._config = config

    @property
    def function(self) -> ExpressionTree:
        return self._function

    @property
    def config(self) -> IntegralConfig:
        return self._config

    @property
    def order(self) -> ApproxOrder:
        return self._config.order

    @property
    def grain(self) -> int:
        return self._config.grain

    def integrate(self, x_from: float, x_to: float,
                  cancel_event: Optional[threading.Event] = None) -> float:
        return _integrate(self._function, float(x_from), float(x_to), self._config, cancel_event)

    def step(self, x_from: float, x_to: float) -> float:
        """Sub-interval width for the given limits (warns on descending limits)"""
        step, reversed_limits = compute_step(float(x_from), float(x_to), self._config.grain)
        if reversed_limits:
            warnings.warn("Incorrect interval limits: Limits are swapped",
                          ReversedLimitsWarning, stacklevel=2)
        return step

    def set_formula(self, function: Union[ExpressionTree, str], variable: Optional[str] = None):
        self._function = _as_tree(function, variable or self._function.variable)

    def set_order(self, order: Union[ApproxOrder, int, str]):
        self._config = self._config.with_order(order)

    def set_grain(self, grain: Union[Grain, int, str]):
        self._config = self._config.with_grain(grain)

    def copy(self) -> 'Integral':
        # Trees are immutable, so sharing the function is safe
        return Integral(self._function, config=self._config)

    def __repr__(self) -> str:
        return (f"Integral({self._function.formula!r}, order={int(self.order)}, "
                f"grain={self.grain})")


def _as_tree(function: Union[ExpressionTree, str], variable: str) -> ExpressionTree:
    if isinstance(function, ExpressionTree):
        return function
    if isinstance(function, str):
        return parse(function, variable)
    raise TypeError(f"Expected an ExpressionTree or a formula string, got {type(function).__name__}")
