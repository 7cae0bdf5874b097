import math
import random
import unittest
from decimal import Decimal

from propgen.constraints import InRange, Precision
from propgen.errors import GeneratorConfigurationError
from propgen.numeric import BigDecimalGenerator, DoubleGenerator, FloatGenerator
from propgen.random_source import SourceOfRandomness, to_float32
from propgen.status import FixedGenerationStatus


def _scale(value: Decimal) -> int:
    return -value.as_tuple().exponent


class TestBigDecimalGenerator(unittest.TestCase):
    def setUp(self) -> None:
        self.random = SourceOfRandomness(random.Random(42))

    def test_integral_bounds_give_integral_values(self):
        gen = BigDecimalGenerator().configure(InRange(min="10", max="20"))
        for _ in range(10000):
            value = gen.generate(self.random, FixedGenerationStatus(4))
            self.assertIsInstance(value, Decimal)
            self.assertTrue(Decimal(10) <= value <= Decimal(20))
            self.assertEqual(_scale(value), 0)

    def test_scale_is_the_largest_requested(self):
        gen = BigDecimalGenerator().configure(InRange(min="1.5", max="2.5"), Precision(scale=2))
        for _ in range(500):
            value = gen.generate(self.random, FixedGenerationStatus(1))
            self.assertEqual(_scale(value), 2)
            self.assertTrue(Decimal("1.5") <= value < Decimal("2.5"))

    def test_bound_scale_beats_smaller_precision(self):
        gen = BigDecimalGenerator().configure(InRange(min="0.125", max="0.5"), Precision(scale=1))
        self.assertEqual(gen.decide_scale(), 3)

    def test_precision_without_range_follows_size(self):
        gen = BigDecimalGenerator().configure(Precision(scale=3))
        for _ in range(500):
            value = gen.generate(self.random, FixedGenerationStatus(0))
            self.assertEqual(_scale(value), 3)
            self.assertTrue(Decimal(-10) <= value < Decimal(10))

    def test_bad_configuration_is_rejected(self):
        with self.assertRaises(GeneratorConfigurationError):
            BigDecimalGenerator().configure(InRange(min="5", max="1"))
        with self.assertRaises(GeneratorConfigurationError):
            BigDecimalGenerator().configure(InRange(min="abc"))
        with self.assertRaises(GeneratorConfigurationError):
            BigDecimalGenerator().configure(Precision(scale=-1))

    def test_shrinks_are_smaller_in_magnitude(self):
        gen = BigDecimalGenerator()
        larger = Decimal("12.34")
        shrinks = gen.shrink(self.random, larger)
        self.assertIn(Decimal(0), shrinks)
        self.assertNotIn(larger, shrinks)
        for each in shrinks:
            self.assertLess(gen.magnitude(each), gen.magnitude(larger))

    def test_shrinks_never_offer_the_exclusive_max(self):
        gen = BigDecimalGenerator().configure(InRange(min="-20", max="20"))
        shrinks = gen.shrink(self.random, Decimal("-20"))
        self.assertIn(Decimal(0), shrinks)
        self.assertNotIn(Decimal(20), shrinks)
        self.assertTrue(all(Decimal(-20) <= each < Decimal(20) for each in shrinks))

    def test_shrinks_stay_in_range(self):
        gen = BigDecimalGenerator().configure(InRange(min="1.5", max="2.5"))
        shrinks = gen.shrink(self.random, Decimal("2.4"))
        self.assertEqual(shrinks[0], Decimal("1.5"))
        self.assertTrue(all(Decimal("1.5") <= each <= Decimal("2.5") for each in shrinks))


class TestFloatingGenerators(unittest.TestCase):
    def setUp(self) -> None:
        self.random = SourceOfRandomness(random.Random(42))

    def test_double_range_is_respected(self):
        gen = DoubleGenerator().configure(InRange(min="-1.5", max="2.5"))
        for _ in range(1000):
            self.assertTrue(-1.5 <= gen.generate(self.random, FixedGenerationStatus(3)) <= 2.5)

    def test_double_specific_bounds(self):
        gen = DoubleGenerator().configure(InRange(min_double=0.25, max_double=0.5))
        for _ in range(200):
            self.assertTrue(0.25 <= gen.generate(self.random, FixedGenerationStatus(3)) <= 0.5)

    def test_double_shrinks(self):
        gen = DoubleGenerator()
        shrinks = gen.shrink(self.random, 2.25)
        self.assertEqual(shrinks[0], 0.0)
        self.assertIn(2.0, shrinks)
        self.assertNotIn(2.25, shrinks)
        self.assertTrue(all(abs(each) < 2.25 for each in shrinks))

    def test_non_finite_values_do_not_shrink(self):
        gen = DoubleGenerator()
        self.assertFalse(gen.can_shrink(math.inf))
        self.assertFalse(gen.can_shrink(math.nan))

    def test_float_values_are_single_precision(self):
        gen = FloatGenerator()
        for _ in range(500):
            value = gen.generate(self.random, FixedGenerationStatus(5))
            self.assertEqual(value, to_float32(value))

    def test_float_bounds_are_narrowed(self):
        gen = FloatGenerator().configure(InRange(min_float=0.1, max_float=0.2))
        for _ in range(200):
            value = gen.generate(self.random, FixedGenerationStatus(1))
            self.assertTrue(to_float32(0.1) <= value <= to_float32(0.2))

    def test_float_shrinks_are_single_precision(self):
        gen = FloatGenerator()
        larger = to_float32(3.7)
        for each in gen.shrink(self.random, larger):
            self.assertEqual(each, to_float32(each))
            self.assertLess(abs(each), abs(larger))

    def test_float_bound_outside_domain_is_rejected(self):
        with self.assertRaises(GeneratorConfigurationError):
            FloatGenerator().configure(InRange(max="1e39"))


if __name__ == "__main__":
    unittest.main()
