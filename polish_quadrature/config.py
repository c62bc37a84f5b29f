"""
Integration configuration: approximation order, grain and execution settings.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Union

from .errors import ConfigurationError


class ApproxOrder(IntEnum):
    """Closed Newton-Cotes rule order (number of panels per sub-interval)"""
    ORDER_0 = 0
    ORDER_1 = 1
    ORDER_2 = 2
    ORDER_3 = 3
    ORDER_4 = 4
    ORDER_5 = 5


class Grain(IntEnum):
    """Named sub-interval counts"""
    COARSE = 1000
    MEDIUM = 10000
    FINE = 100000


def resolve_order(order: Union[ApproxOrder, int, str]) -> ApproxOrder:
    if isinstance(order, str):
        text = order.strip().upper()
        if text.startswith('ORDER_'):
            text = text[len('ORDER_'):]
        try:
            order = int(text)
        except ValueError:
            raise ConfigurationError(f"Unknown approximation order: {order!r}") from None
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise ConfigurationError(f"Approximation order must be an integer, got {order!r}")
    try:
        return ApproxOrder(int(order))
    except ValueError:
        raise ConfigurationError(
            f"Approximation order must be between 0 and {int(max(ApproxOrder))}, got {order}") from None


def resolve_grain(grain: Union[Grain, int, str]) -> int:
    if isinstance(grain, str):
        text = grain.strip()
        if text.upper() in Grain.__members__:
            return int(Grain[text.upper()])
        try:
            grain = int(text)
        except ValueError:
            raise ConfigurationError(f"Unknown grain: {grain!r}") from None
    if isinstance(grain, bool) or not isinstance(grain, numbers.Integral):
        raise ConfigurationError(f"Grain must be an integer, got {grain!r}")
    if grain <= 0:
        raise ConfigurationError(f"Grain must be positive, got {grain}")
    return int(grain)


@dataclass(frozen=True)
class IntegralConfig:
    order: ApproxOrder = ApproxOrder.ORDER_2
    grain: int = int(Grain.COARSE)

    # execution
    chunk_size: int = 8192          # sub-intervals per vectorized batch
    workers: int = 1                # threads evaluating batches

    def __post_init__(self):
        object.__setattr__(self, 'order', resolve_order(self.order))
        object.__setattr__(self, 'grain', resolve_grain(self.grain))
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers <= 0:
            raise ConfigurationError(f"workers must be a positive integer, got {self.workers!r}")

    @classmethod
    def from_names(cls, order: Union[ApproxOrder, int, str] = ApproxOrder.ORDER_2,
                   grain: Union[Grain, int, str] = Grain.COARSE, **execution) -> IntegralConfig:
        """Build from preset names ("fine", "ORDER_4") or plain integers"""
        return cls(order=resolve_order(order), grain=resolve_grain(grain), **execution)

    def with_order(self, order: Union[ApproxOrder, int, str]) -> IntegralConfig:
        return replace(self, order=resolve_order(order))

    def with_grain(self, grain: Union[Grain, int, str]) -> IntegralConfig:
        return replace(self, grain=resolve_grain(grain))

    @property
    def evaluations(self) -> int:
        """Evaluator calls one integration makes"""
        return self.grain * (int(self.order) + 1)
