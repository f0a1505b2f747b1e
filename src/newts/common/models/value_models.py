# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Numeric value kinds carried by samples and points.

Each kind is an immutable wrapper around a number that knows how to add,
scale, divide and difference itself. The set of kinds is closed (see
:class:`~newts.common.enums.MetricType`); aggregation code only ever talks
to the shared :class:`ValueType` operations.

- :class:`Gauge` wraps a float.
- :class:`Counter` wraps an unsigned 64-bit integer; ``delta`` absorbs
  32-bit and 64-bit wraparound.
- :class:`Derive` wraps a signed integer; ``delta`` is a plain difference.
- :class:`Absolute` wraps a non-negative integer that resets on every read,
  so ``delta`` is the value itself.

Dividing any kind yields a :class:`Gauge`, since the result is a rate or an
average rather than a running total.
"""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from typing import ClassVar

from newts.common.constants import COUNTER32_MAX, COUNTER64_MAX
from newts.common.enums import MetricType
from newts.common.exceptions import InvalidArgumentError, ValueTypeError

__all__ = [
    "Absolute",
    "Counter",
    "Derive",
    "Gauge",
    "ValueType",
]


class ValueType(ABC):
    """Base class for every numeric value kind."""

    __slots__ = ("_value",)

    metric_type: ClassVar[MetricType]

    @property
    def value(self) -> float | int:
        return self._value

    @abstractmethod
    def plus(self, other: ValueType) -> ValueType:
        """Return the sum of this value and ``other``."""

    @abstractmethod
    def times(self, factor: numbers.Real) -> ValueType:
        """Return this value scaled by ``factor`` (typically an elapsed duration)."""

    def divide_by(self, divisor: numbers.Real) -> Gauge:
        """Return this value divided by ``divisor``.

        Raises:
            ZeroDivisionError: If ``divisor`` is zero.
        """
        return Gauge(self._value / divisor)

    def weighted(self, millis: numbers.Real) -> Gauge:
        """Return this value weighted by an elapsed time, as a Gauge.

        Unlike :meth:`times`, the result never wraps, so large counters can be
        integrated over long intervals.
        """
        return Gauge(self.to_float() * millis)

    @abstractmethod
    def delta(self, previous: ValueType) -> ValueType:
        """Return the change from ``previous`` to this value."""

    def to_float(self) -> float:
        return float(self._value)

    def __float__(self) -> float:
        return self.to_float()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    @staticmethod
    def compose(number: numbers.Real, metric_type: MetricType | str) -> ValueType:
        """Build a value of the kind named by ``metric_type``."""
        try:
            kind = _KINDS[MetricType(metric_type)]
        except (KeyError, ValueError) as e:
            raise InvalidArgumentError(f"Unknown metric type: {metric_type!r}") from e
        return kind(number)


class Gauge(ValueType):
    """An absolute, instantaneous value."""

    __slots__ = ()

    metric_type = MetricType.GAUGE

    def __init__(self, value: numbers.Real) -> None:
        self._value = float(value)

    def plus(self, other: ValueType) -> Gauge:
        if not isinstance(other, ValueType):
            raise ValueTypeError("plus", self, other)
        return Gauge(self._value + other.to_float())

    def times(self, factor: numbers.Real) -> Gauge:
        return Gauge(self._value * factor)

    def delta(self, previous: ValueType) -> Gauge:
        if not isinstance(previous, ValueType):
            raise ValueTypeError("delta", self, previous)
        return Gauge(self._value - previous.to_float())

    def is_nan(self) -> bool:
        return math.isnan(self._value)


class _IntegralValue(ValueType):
    """Shared behavior for the integer kinds."""

    __slots__ = ()

    def __init__(self, value: numbers.Real) -> None:
        self._value = self._normalize(_as_int(value, type(self).__name__))

    def _normalize(self, value: int) -> int:
        return value

    def _require_same_kind(self, operation: str, other: object) -> None:
        if type(other) is not type(self):
            raise ValueTypeError(operation, self, other)

    def plus(self, other: ValueType) -> _IntegralValue:
        self._require_same_kind("plus", other)
        return type(self)(self._normalize(self._value + other._value))

    def times(self, factor: numbers.Real) -> _IntegralValue:
        if isinstance(factor, bool) or not isinstance(factor, numbers.Integral):
            raise ValueTypeError("times", self, factor)
        return type(self)(self._normalize(self._value * int(factor)))


class Counter(_IntegralValue):
    """A monotonically reported running total that may wrap around."""

    __slots__ = ()

    metric_type = MetricType.COUNTER

    def _normalize(self, value: int) -> int:
        if value < 0:
            raise InvalidArgumentError(f"Counter values must be non-negative, got {value}")
        return value % COUNTER64_MAX

    def delta(self, previous: ValueType) -> Counter:
        self._require_same_kind("delta", previous)
        if self._value >= previous._value:
            return Counter(self._value - previous._value)
        # The counter went backwards, so it wrapped. Assume it wrapped at the
        # width the previous reading fit in.
        wrap = COUNTER32_MAX if previous._value < COUNTER32_MAX else COUNTER64_MAX
        return Counter(wrap - previous._value + self._value)


class Derive(_IntegralValue):
    """A running total that may legitimately decrease."""

    __slots__ = ()

    metric_type = MetricType.DERIVE

    def delta(self, previous: ValueType) -> Derive:
        self._require_same_kind("delta", previous)
        return Derive(self._value - previous._value)


class Absolute(_IntegralValue):
    """A count that resets on every read; each reading is already a delta."""

    __slots__ = ()

    metric_type = MetricType.ABSOLUTE

    def _normalize(self, value: int) -> int:
        if value < 0:
            raise InvalidArgumentError(f"Absolute values must be non-negative, got {value}")
        return value

    def delta(self, previous: ValueType) -> Absolute:
        self._require_same_kind("delta", previous)
        return Absolute(self._value)


def _as_int(value: numbers.Real, kind: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{kind} values must be numeric, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise InvalidArgumentError(f"{kind} values must be integral, got {value!r}")


_KINDS: dict[MetricType, type[ValueType]] = {
    MetricType.GAUGE: Gauge,
    MetricType.COUNTER: Counter,
    MetricType.DERIVE: Derive,
    MetricType.ABSOLUTE: Absolute,
}
