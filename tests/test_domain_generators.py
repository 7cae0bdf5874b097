import random
import unittest

from propgen.constraints import InRange
from propgen.domains import ExhaustiveDomainGenerator, GuaranteeValuesGenerator, SamplingDomainGenerator
from propgen.errors import DomainExhaustedError, GeneratorConfigurationError
from propgen.numeric import IntegerGenerator
from propgen.random_source import SourceOfRandomness
from propgen.status import FixedGenerationStatus


class TestDomainGenerators(unittest.TestCase):
    def setUp(self) -> None:
        self.random = SourceOfRandomness(random.Random(42))
        self.status = FixedGenerationStatus(0)

    def test_exhaustive_hands_out_each_value_once(self):
        gen = ExhaustiveDomainGenerator([1, 2, 2, 3])
        values = []
        while gen.has_more():
            values.append(gen.generate(self.random, self.status))
        self.assertEqual(values, [1, 2, 3])

        with self.assertRaises(DomainExhaustedError):
            gen.generate(self.random, self.status)

    def test_sampling_stays_in_domain(self):
        gen = SamplingDomainGenerator(["x", "y", "z"])
        seen = {gen.generate(self.random, self.status) for _ in range(300)}
        self.assertEqual(seen, {"x", "y", "z"})
        self.assertTrue(gen.can_shrink("x"))
        self.assertEqual(gen.shrink(self.random, "x"), [])

    def test_sampling_needs_values(self):
        with self.assertRaises(GeneratorConfigurationError):
            SamplingDomainGenerator([])

    def test_guaranteed_values_come_first(self):
        fallback = IntegerGenerator().configure(InRange(min="0", max="9"))
        gen = GuaranteeValuesGenerator(ExhaustiveDomainGenerator([100, 200]), fallback)

        self.assertEqual(gen.generate(self.random, self.status), 100)
        self.assertEqual(gen.generate(self.random, self.status), 200)
        for _ in range(50):
            self.assertTrue(0 <= gen.generate(self.random, self.status) <= 9)

    def test_guaranteed_values_shrink_with_the_fallback(self):
        gen = GuaranteeValuesGenerator(ExhaustiveDomainGenerator([5]), IntegerGenerator())
        self.assertEqual(gen.shrink(self.random, 5), [0, 3, 4])
        self.assertEqual(gen.types(), ["int", "int32"])


if __name__ == "__main__":
    unittest.main()
