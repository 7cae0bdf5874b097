# Paste below to run tests
# python -m unittest discover -s tests -p "test_*.py"


import logging
import random
import unittest

from propgen.config import EngineConfig
from propgen.constraints import InRange
from propgen.logging_setup import LOG_FORMAT, setup_logging
from propgen.numeric import IntegerGenerator
from propgen.random_source import SourceOfRandomness
from propgen.sampling import generate_values, shrink_path


class TestGenerateValues(unittest.TestCase):
    def test_generate_values_count(self):
        values = generate_values(IntegerGenerator(), 10, seed=1)
        self.assertEqual(len(values), 10)

    def test_generate_values_repeatable(self):
        a = generate_values(IntegerGenerator(), 5, seed=42)
        b = generate_values(IntegerGenerator(), 5, seed=42)
        self.assertEqual(a, b)

    def test_generate_values_invalid(self):
        with self.assertRaises(ValueError):
            generate_values(IntegerGenerator(), 0, seed=1)

    def test_defaults_come_from_config(self):
        cfg = EngineConfig(seed=5, default_sample_count=7)
        self.assertEqual(generate_values(IntegerGenerator(), cfg=cfg), generate_values(IntegerGenerator(), 7, seed=5))

    def test_generation_is_logged(self):
        with self.assertLogs("propgen.sampling", level="INFO") as logs:
            generate_values(IntegerGenerator(), 3, seed=1)
        self.assertIn("Generated 3 values", logs.output[0])


class TestShrinkPath(unittest.TestCase):
    def test_path_reaches_least_value(self):
        path = shrink_path(IntegerGenerator(), SourceOfRandomness(random.Random(1)), 100)
        self.assertEqual(path[0], 100)
        self.assertEqual(path[-1], 0)

    def test_keep_predicate_limits_the_path(self):
        gen = IntegerGenerator().configure(InRange(min="0", max="1000"))
        path = shrink_path(gen, SourceOfRandomness(random.Random(1)), 1000, keep=lambda v: v >= 37)
        self.assertEqual(path[-1], 37)

    def test_limit_bounds_the_number_of_steps(self):
        path = shrink_path(IntegerGenerator(), SourceOfRandomness(random.Random(1)), 100, limit=0)
        self.assertEqual(path, [100])


class TestEngineConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = EngineConfig()
        self.assertEqual(cfg.log_level, "INFO")
        self.assertEqual(cfg.max_shrink_rounds, 1000)
        self.assertAlmostEqual(cfg.default_null_probability, 0.2)

    def test_config_is_frozen(self):
        with self.assertRaises(Exception):
            EngineConfig().seed = 3  # type: ignore[misc]


class TestLoggingSetup(unittest.TestCase):
    def setUp(self) -> None:
        self.level = logging.getLogger().level

    def tearDown(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.level)
        for handler in list(root_logger.handlers):
            if getattr(handler, "_propgen_handler", False):
                root_logger.removeHandler(handler)

    def test_setup_is_part_of_the_public_api(self):
        import propgen

        self.assertIs(propgen.setup_logging, setup_logging)
        self.assertIn("setup_logging", propgen.__all__)

    def test_setup_is_idempotent(self):
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        ours = [h for h in logging.getLogger().handlers if getattr(h, "_propgen_handler", False)]
        self.assertEqual(len(ours), 1)
        self.assertEqual(ours[0].formatter._fmt, LOG_FORMAT)


if __name__ == "__main__":
    unittest.main()
