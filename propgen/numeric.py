"""Numeric scalar generators.

Integral generators (byte, short, int, long, big integer) and floating
generators (float, double, big decimal) share one shape: an optional
configured range, a size-driven default range when a bound is missing, a
uniform draw, and a shrink toward the permitted value of least magnitude.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Tuple

from propgen.constraints import InRange, Precision
from propgen.errors import GeneratorConfigurationError, generator_error
from propgen.generator import Configurator, Generator
from propgen.random_source import (
    BYTE_MAX,
    BYTE_MIN,
    DOUBLE_MAX,
    INT_MAX,
    INT_MIN,
    LONG_MAX,
    LONG_MIN,
    SHORT_MAX,
    SHORT_MIN,
    FLOAT_MAX,
    SourceOfRandomness,
    to_float32,
)
from propgen.ranges import (
    check_range,
    choose_big_integer,
    choose_big_integer_exclusive,
    in_range,
    least_magnitude,
)
from propgen.registry import register
from propgen.sequences import halving_decimal, halving_integral
from propgen.status import GenerationStatus


def size_span(status: GenerationStatus) -> int:
    return 10 ** (status.size() + 1)


def _keep_shrink(candidate: Any, larger: Any, accepted: List[Any], permitted: Callable[[Any], bool]) -> bool:
    if candidate == larger or candidate in accepted or not permitted(candidate):
        return False
    if abs(candidate) < abs(larger):
        return True
    # The positive counterpart of a negative value is the one tie allowed.
    return larger < 0 and candidate == -larger


def shrink_integral(larger: int, least: int, permitted: Callable[[int], bool]) -> List[int]:
    candidates: List[int] = list(halving_integral(larger, least))
    if larger < 0:
        candidates.append(-larger)
    candidates.extend(halving_integral(larger, -larger))

    results: List[int] = []
    for each in candidates:
        if _keep_shrink(each, larger, results, permitted):
            results.append(each)
    return results


def shrink_floating(
    larger: float,
    least: float,
    permitted: Callable[[float], bool],
    narrow: Callable[[float], float] = float,
) -> List[float]:
    candidates: List[float] = list(halving_decimal(larger, least))
    candidates.insert(1 if candidates else 0, float(math.trunc(larger)))
    if larger < 0:
        candidates.append(-larger)
    candidates.extend(halving_decimal(larger, -larger))

    results: List[float] = []
    for each in candidates:
        each = narrow(each)
        if _keep_shrink(each, larger, results, permitted):
            results.append(each)
    return results


##----------------INTEGRAL----------------##
class IntegralGenerator(Generator[int]):
    VALUE_TYPES = (int,)
    DOMAIN: Tuple[Optional[int], Optional[int]] = (None, None)
    RANGE_FIELDS: Tuple[Optional[str], Optional[str]] = (None, None)

    def __init__(self) -> None:
        self._min: Optional[int] = None
        self._max: Optional[int] = None

    def _configurators(self) -> Dict[type, Configurator]:
        return {InRange: self.configure_in_range}

    def configure_in_range(self, range_: InRange) -> None:
        location = f"{type(self).__name__} InRange"
        min_field, max_field = self.RANGE_FIELDS
        min_v = self._bound(range_.min, range_, min_field, location, "min")
        max_v = self._bound(range_.max, range_, max_field, location, "max")
        check_range(location, min_v, max_v)
        self._min, self._max = min_v, max_v

    def _bound(
        self,
        generic: str,
        range_: InRange,
        field: Optional[str],
        location: str,
        label: str,
    ) -> Optional[int]:
        if generic != "":
            try:
                value = int(generic.strip())
            except ValueError as exc:
                raise GeneratorConfigurationError(
                    generator_error(
                        location,
                        f"{label} '{generic}' is not an integer",
                        f"set {label} to a whole number",
                    )
                ) from exc
        elif field is not None and getattr(range_, field) is not None:
            value = int(getattr(range_, field))
        else:
            return None

        low, high = self.DOMAIN
        if (low is not None and value < low) or (high is not None and value > high):
            raise GeneratorConfigurationError(
                generator_error(
                    location,
                    f"{label} {value} is outside [{low}, {high}]",
                    f"keep {label} within the {self.TYPES[0]} domain",
                )
            )
        return value

    def bounds(self, status: GenerationStatus) -> Tuple[int, int]:
        low, high = self.DOMAIN
        span = size_span(status)
        min_v, max_v = self._min, self._max
        if min_v is None and max_v is None:
            min_v, max_v = -span, span
        elif min_v is None:
            min_v = max_v - span
        elif max_v is None:
            max_v = min_v + span

        if low is not None:
            min_v = max(min_v, low)
        if high is not None:
            max_v = min(max_v, high)
        return min_v, max_v

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> int:
        min_v, max_v = self.bounds(status)
        return self.draw(random, min_v, max_v)

    def draw(self, random: SourceOfRandomness, min_v: int, max_v: int) -> int:
        return choose_big_integer(random, min_v, max_v)

    def _effective_range(self) -> Tuple[Optional[int], Optional[int]]:
        low, high = self.DOMAIN
        return (
            self._min if self._min is not None else low,
            self._max if self._max is not None else high,
        )

    def in_range(self, value: int) -> bool:
        return in_range(*self._effective_range())(value)

    def least_magnitude(self) -> int:
        return least_magnitude(self._min, self._max, 0)

    def can_shrink(self, larger: Any) -> bool:
        if not super().can_shrink(larger):
            return False
        return in_range(*self.DOMAIN)(larger)

    def do_shrink(self, random: SourceOfRandomness, larger: int) -> List[int]:
        return shrink_integral(larger, self.least_magnitude(), self.in_range)

    def magnitude(self, value: Any) -> Decimal:
        return Decimal(abs(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min={self._min}, max={self._max})"


@register("byte", "int8")
class ByteGenerator(IntegralGenerator):
    TYPES = ("byte", "int8")
    DOMAIN = (BYTE_MIN, BYTE_MAX)
    RANGE_FIELDS = ("min_byte", "max_byte")

    def draw(self, random: SourceOfRandomness, min_v: int, max_v: int) -> int:
        return random.next_byte(min_v, max_v)


@register("short", "int16")
class ShortGenerator(IntegralGenerator):
    TYPES = ("short", "int16")
    DOMAIN = (SHORT_MIN, SHORT_MAX)
    RANGE_FIELDS = ("min_short", "max_short")

    def draw(self, random: SourceOfRandomness, min_v: int, max_v: int) -> int:
        return random.next_short(min_v, max_v)


@register("int", "int32")
class IntegerGenerator(IntegralGenerator):
    TYPES = ("int", "int32")
    DOMAIN = (INT_MIN, INT_MAX)
    RANGE_FIELDS = ("min_int", "max_int")

    def draw(self, random: SourceOfRandomness, min_v: int, max_v: int) -> int:
        return random.next_int(min_v, max_v)


@register("long", "int64")
class LongGenerator(IntegralGenerator):
    TYPES = ("long", "int64")
    DOMAIN = (LONG_MIN, LONG_MAX)
    RANGE_FIELDS = ("min_long", "max_long")

    def draw(self, random: SourceOfRandomness, min_v: int, max_v: int) -> int:
        return random.next_long(min_v, max_v)


@register("big_integer")
class BigIntegerGenerator(IntegralGenerator):
    """Unbounded integers; bounded ranges are drawn by rejection sampling."""

    TYPES = ("big_integer",)


##----------------FLOATING----------------##
class FloatingGenerator(Generator[float]):
    VALUE_TYPES = (float,)
    DOMAIN_MAX: float = DOUBLE_MAX
    RANGE_FIELDS: Tuple[str, str] = ("min_double", "max_double")

    def __init__(self) -> None:
        self._min: Optional[float] = None
        self._max: Optional[float] = None

    def _configurators(self) -> Dict[type, Configurator]:
        return {InRange: self.configure_in_range}

    def narrow(self, value: float) -> float:
        return float(value)

    def configure_in_range(self, range_: InRange) -> None:
        location = f"{type(self).__name__} InRange"
        min_field, max_field = self.RANGE_FIELDS
        min_v = self._bound(range_.min, getattr(range_, min_field), location, "min")
        max_v = self._bound(range_.max, getattr(range_, max_field), location, "max")
        check_range(location, min_v, max_v)
        self._min, self._max = min_v, max_v

    def _bound(self, generic: str, specific: Optional[float], location: str, label: str) -> Optional[float]:
        if generic != "":
            try:
                value = float(generic.strip())
            except ValueError as exc:
                raise GeneratorConfigurationError(
                    generator_error(
                        location,
                        f"{label} '{generic}' is not a number",
                        f"set {label} to a decimal number",
                    )
                ) from exc
        elif specific is not None:
            value = float(specific)
        else:
            return None

        if not math.isfinite(value) or abs(value) > self.DOMAIN_MAX:
            raise GeneratorConfigurationError(
                generator_error(
                    location,
                    f"{label} {value} is not a finite {self.TYPES[0]}",
                    f"keep {label} within +/-{self.DOMAIN_MAX}",
                )
            )
        return self.narrow(value)

    def bounds(self, status: GenerationStatus) -> Tuple[float, float]:
        span = float(min(size_span(status), int(self.DOMAIN_MAX)))
        min_v, max_v = self._min, self._max
        if min_v is None and max_v is None:
            return -span, span
        if min_v is None:
            return max(max_v - span, -self.DOMAIN_MAX), max_v
        if max_v is None:
            return min_v, min(min_v + span, self.DOMAIN_MAX)
        return min_v, max_v

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> float:
        min_v, max_v = self.bounds(status)
        return random.next_double(min_v, max_v)

    def in_range(self, value: float) -> bool:
        min_v = self._min if self._min is not None else -self.DOMAIN_MAX
        max_v = self._max if self._max is not None else self.DOMAIN_MAX
        return min_v <= value <= max_v

    def least_magnitude(self) -> float:
        return least_magnitude(self._min, self._max, 0.0)

    def can_shrink(self, larger: Any) -> bool:
        return super().can_shrink(larger) and math.isfinite(larger) and self.narrow(larger) == larger

    def do_shrink(self, random: SourceOfRandomness, larger: float) -> List[float]:
        return shrink_floating(larger, self.least_magnitude(), self.in_range, self.narrow)

    def magnitude(self, value: Any) -> Decimal:
        return Decimal(abs(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min={self._min}, max={self._max})"


@register("double", "float64")
class DoubleGenerator(FloatingGenerator):
    TYPES = ("double", "float64")


@register("float", "float32")
class FloatGenerator(FloatingGenerator):
    """Values representable in IEEE single precision."""

    TYPES = ("float", "float32")
    DOMAIN_MAX = FLOAT_MAX
    RANGE_FIELDS = ("min_float", "max_float")

    def narrow(self, value: float) -> float:
        return to_float32(value)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> float:
        min_v, max_v = self.bounds(status)
        return random.next_float(min_v, max_v)


##----------------BIG DECIMAL----------------##
def scale_of(value: Decimal) -> int:
    exponent = value.as_tuple().exponent
    return -exponent if isinstance(exponent, int) else 0


def move_point_right(value: Decimal, scale: int) -> int:
    """``value * 10**scale`` as an exact integer; ``scale`` must cover the value's scale."""
    sign, digits, exponent = value.as_tuple()
    unscaled = int("".join(str(d) for d in digits) or "0")
    shift = exponent + scale
    if shift < 0:
        raise ValueError(f"scale {scale} is too small for {value}")
    result = unscaled * 10**shift
    return -result if sign else result


def move_point_left(unscaled: int, scale: int) -> Decimal:
    digits = tuple(int(d) for d in str(abs(unscaled)))
    return Decimal((1 if unscaled < 0 else 0, digits, -scale))


@register("big_decimal", "decimal")
class BigDecimalGenerator(Generator[Decimal]):
    """Arbitrary-precision decimals.

    The configured maximum is exclusive. Results carry exactly the effective
    scale: the largest of 0, the bounds' scales and the ``Precision`` scale.
    """

    TYPES = ("big_decimal", "decimal")
    VALUE_TYPES = (Decimal,)

    def __init__(self) -> None:
        self._min: Optional[Decimal] = None
        self._max: Optional[Decimal] = None
        self._precision: Optional[Precision] = None

    def _configurators(self) -> Dict[type, Configurator]:
        return {InRange: self.configure_in_range, Precision: self.configure_precision}

    def configure_in_range(self, range_: InRange) -> None:
        location = "BigDecimalGenerator InRange"
        min_v = self._parse(range_.min, location, "min")
        max_v = self._parse(range_.max, location, "max")
        check_range(location, min_v, max_v)
        self._min, self._max = min_v, max_v

    def configure_precision(self, precision: Precision) -> None:
        if precision.scale < 0:
            raise GeneratorConfigurationError(
                generator_error(
                    "BigDecimalGenerator Precision",
                    f"scale must be >= 0, got {precision.scale}",
                    "set scale to the number of digits after the decimal point",
                )
            )
        self._precision = precision

    @staticmethod
    def _parse(text: str, location: str, label: str) -> Optional[Decimal]:
        if text == "":
            return None
        try:
            value = Decimal(text.strip())
        except InvalidOperation as exc:
            raise GeneratorConfigurationError(
                generator_error(
                    location,
                    f"{label} '{text}' is not a decimal number",
                    f"set {label} to a decimal string like '10.25'",
                )
            ) from exc
        if not value.is_finite():
            raise GeneratorConfigurationError(
                generator_error(location, f"{label} must be finite", f"set {label} to a finite number")
            )
        return value

    def decide_scale(self) -> int:
        scales = [0]
        for bound in (self._min, self._max):
            if bound is not None:
                scales.append(scale_of(bound))
        if self._precision is not None:
            scales.append(self._precision.scale)
        return max(scales)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> Decimal:
        scale = self.decide_scale()
        # Widen in the shifted integral domain so no decimal context rounding applies.
        span = size_span(status) * 10**scale
        min_shifted = move_point_right(self._min, scale) if self._min is not None else None
        max_shifted = move_point_right(self._max, scale) if self._max is not None else None
        if min_shifted is None and max_shifted is None:
            min_shifted, max_shifted = -span, span
        elif min_shifted is None:
            min_shifted = max_shifted - span
        elif max_shifted is None:
            max_shifted = min_shifted + span

        return move_point_left(choose_big_integer_exclusive(random, min_shifted, max_shifted), scale)

    def in_range(self, value: Decimal) -> bool:
        return in_range(self._min, self._max)(value)

    def least_magnitude(self) -> Decimal:
        return least_magnitude(self._min, self._max, Decimal(0))

    def can_shrink(self, larger: Any) -> bool:
        return super().can_shrink(larger) and larger.is_finite()

    def do_shrink(self, random: SourceOfRandomness, larger: Decimal) -> List[Decimal]:
        scale = max(self.decide_scale(), scale_of(larger))
        shifted = move_point_right(larger, scale)
        least = move_point_right(self.least_magnitude(), scale)

        def permitted(candidate: int) -> bool:
            # Generation never reaches the configured max.
            value = move_point_left(candidate, scale)
            return self.in_range(value) and (self._max is None or value < self._max)

        return [move_point_left(each, scale) for each in shrink_integral(shifted, least, permitted)]

    def magnitude(self, value: Any) -> Decimal:
        return abs(value)

    def __repr__(self) -> str:
        return f"BigDecimalGenerator(min={self._min}, max={self._max}, precision={self._precision})"
