import random
import unittest
from decimal import Decimal

from propgen.constraints import Distinct, InRange, Size
from propgen.errors import GeneratorConfigurationError
from propgen.lists import is_distinct, remove_from, removals, shrinks_of_one_item
from propgen.numeric import ByteGenerator, IntegerGenerator
from propgen.random_source import SourceOfRandomness
from propgen.scalars import BooleanGenerator
from propgen.status import FixedGenerationStatus
from propgen.structural import ArrayGenerator, MapGenerator, SetGenerator


class FixedIndex(SourceOfRandomness):
    """Always picks the same list position."""

    def __init__(self, index):
        super().__init__(random.Random(0))
        self.index = index

    def next_int(self, min_v=0, max_v=0):
        return self.index


class TestListHelpers(unittest.TestCase):
    def test_one_item_shrinks_touch_the_chosen_position_only(self):
        shrinks = shrinks_of_one_item(FixedIndex(2), [5, 6, 7], lambda random, item: [item - 1, item - 2])
        self.assertEqual(shrinks, [[5, 6, 6], [5, 6, 5]])
        self.assertEqual(shrinks_of_one_item(FixedIndex(0), [], lambda random, item: [0]), [])

    def test_remove_from_cuts_aligned_windows(self):
        self.assertEqual(remove_from([1, 2, 3, 4, 5], 2), [[3, 4, 5], [1, 2, 5], [1, 2, 3, 4]])

    def test_remove_from_rejects_bad_counts(self):
        with self.assertRaises(ValueError):
            remove_from([1, 2], 3)
        with self.assertRaises(ValueError):
            remove_from([1, 2], -1)

    def test_removals_halve_the_window(self):
        self.assertEqual(
            list(removals([1, 2, 3, 4])),
            [[3, 4], [1, 2], [2, 3, 4], [1, 3, 4], [1, 2, 4], [1, 2, 3]],
        )

    def test_single_item_can_be_removed(self):
        self.assertEqual(list(removals([7])), [[]])
        self.assertEqual(list(removals([])), [])

    def test_is_distinct_uses_equality(self):
        self.assertTrue(is_distinct([[1], [2]]))
        self.assertFalse(is_distinct([[1], [1]]))


class TestArrayGenerator(unittest.TestCase):
    def setUp(self) -> None:
        self.random = SourceOfRandomness(random.Random(42))

    def test_length_and_distinctness(self):
        gen = ArrayGenerator(ByteGenerator()).configure(Size(min=2, max=4), Distinct())
        for _ in range(500):
            items = gen.generate(self.random, FixedGenerationStatus(3))
            self.assertTrue(2 <= len(items) <= 4)
            self.assertTrue(is_distinct(items))

    def test_length_follows_size_without_constraint(self):
        items = ArrayGenerator(ByteGenerator()).generate(self.random, FixedGenerationStatus(5))
        self.assertEqual(len(items), 5)

    def test_shrinks_of_distinct_list(self):
        gen = ArrayGenerator(ByteGenerator()).configure(Size(min=2, max=4), Distinct())
        shrinks = gen.shrink(self.random, [1, 2, 3, 4])

        self.assertNotIn([1, 2, 3, 4], shrinks)
        self.assertIn([1, 2], shrinks)
        self.assertIn([1, 2, 3], shrinks)
        for each in shrinks:
            self.assertTrue(2 <= len(each) <= 4)
            self.assertTrue(is_distinct(each))
        self.assertNotIn([1, 1, 3, 4], shrinks)

    def test_element_shrinks_change_a_single_position(self):
        gen = ArrayGenerator(ByteGenerator())
        for _ in range(20):
            same_length = [each for each in gen.shrink(self.random, [5, 5, 5, 5]) if len(each) == 4]
            self.assertTrue(same_length)
            changed = {tuple(i for i, item in enumerate(each) if item != 5) for each in same_length}
            self.assertEqual(len(changed), 1)
            self.assertEqual(len(next(iter(changed))), 1)

    def test_removal_candidates_are_subsets(self):
        gen = ArrayGenerator(ByteGenerator()).configure(Size(min=2, max=4), Distinct())
        shorter = [each for each in gen.shrink(self.random, [1, 2, 3, 4]) if len(each) < 4]
        self.assertTrue(shorter)
        for each in shorter:
            self.assertTrue(set(each) <= {1, 2, 3, 4})

    def test_magnitude(self):
        gen = ArrayGenerator(IntegerGenerator())
        self.assertEqual(gen.magnitude([1, -2, 3]), Decimal(18))
        self.assertEqual(gen.magnitude([]), Decimal(0))

    def test_component_constraints(self):
        gen = ArrayGenerator(IntegerGenerator()).configure_component(0, InRange(min="0", max="9"))
        items = gen.generate(self.random, FixedGenerationStatus(20))
        self.assertTrue(all(0 <= each <= 9 for each in items))

    def test_bad_size_is_rejected(self):
        with self.assertRaises(GeneratorConfigurationError):
            ArrayGenerator(ByteGenerator()).configure(Size(min=4, max=2))
        with self.assertRaises(GeneratorConfigurationError):
            ArrayGenerator(ByteGenerator()).configure(Size(min=-1, max=2))

    def test_impossible_distinct_fill_gives_up(self):
        gen = ArrayGenerator(IntegerGenerator().configure(InRange(min="1", max="2"))).configure(
            Size(min=3, max=3), Distinct()
        )
        with self.assertRaises(ValueError):
            gen.generate(self.random, FixedGenerationStatus(0))


class TestSetAndMapGenerators(unittest.TestCase):
    def setUp(self) -> None:
        self.random = SourceOfRandomness(random.Random(42))

    def test_set_has_requested_size(self):
        gen = SetGenerator(ByteGenerator()).configure(Size(min=3, max=3))
        for _ in range(100):
            value = gen.generate(self.random, FixedGenerationStatus(3))
            self.assertIsInstance(value, frozenset)
            self.assertEqual(len(value), 3)

    def test_set_shrinks(self):
        shrinks = SetGenerator(ByteGenerator()).shrink(self.random, frozenset({1, 2, 3}))
        self.assertIn(frozenset({2, 3}), shrinks)
        self.assertIn(frozenset({1, 2}), shrinks)
        self.assertNotIn(frozenset({1, 2, 3}), shrinks)

    def test_map_generation(self):
        keys = IntegerGenerator().configure(InRange(min="0", max="100"))
        gen = MapGenerator(keys, BooleanGenerator()).configure(Size(min=2, max=2))
        for _ in range(100):
            value = gen.generate(self.random, FixedGenerationStatus(3))
            self.assertEqual(len(value), 2)
            self.assertTrue(all(0 <= k <= 100 and isinstance(v, bool) for k, v in value.items()))

    def test_map_shrinks(self):
        keys = IntegerGenerator().configure(InRange(min="0", max="100"))
        gen = MapGenerator(keys, BooleanGenerator())
        shrinks = gen.shrink(self.random, {5: True})
        self.assertIn({}, shrinks)
        self.assertIn({0: True}, shrinks)
        self.assertIn({5: False}, shrinks)
        self.assertNotIn({5: True}, shrinks)


if __name__ == "__main__":
    unittest.main()
