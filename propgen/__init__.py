"""Public propgen API.

Importing the package registers every built-in generator, so
``generator_for("int")`` and friends work right away.
"""

from __future__ import annotations

from propgen.composite import CompositeGenerator
from propgen.config import EngineConfig
from propgen.constraints import Distinct, InRange, NullAllowed, Precision, Size
from propgen.distribution import GeometricDistribution
from propgen.domains import ExhaustiveDomainGenerator, GuaranteeValuesGenerator, SamplingDomainGenerator
from propgen.errors import DomainExhaustedError, GeneratorConfigurationError
from propgen.generator import Gen, Generator, freq
from propgen.items import Weighted
from propgen.lambdas import GeneratedFunction, LambdaGenerator
from propgen.logging_setup import setup_logging
from propgen.nullable import NullableGenerator
from propgen.numeric import (
    BigDecimalGenerator,
    BigIntegerGenerator,
    ByteGenerator,
    DoubleGenerator,
    FloatGenerator,
    IntegerGenerator,
    LongGenerator,
    ShortGenerator,
)
from propgen.random_source import SourceOfRandomness
from propgen.registry import REGISTRY, factories_for, generator_for, register
from propgen.sampling import generate_values, shrink_path
from propgen.scalars import BooleanGenerator, CharacterGenerator, EnumGenerator, StringGenerator
from propgen.status import FixedGenerationStatus, GenerationStatus, Key, SimpleGenerationStatus
from propgen.structural import ArrayGenerator, MapGenerator, OptionalGenerator, SetGenerator

__all__ = [
    "ArrayGenerator",
    "BigDecimalGenerator",
    "BigIntegerGenerator",
    "BooleanGenerator",
    "ByteGenerator",
    "CharacterGenerator",
    "CompositeGenerator",
    "Distinct",
    "DomainExhaustedError",
    "DoubleGenerator",
    "EngineConfig",
    "EnumGenerator",
    "ExhaustiveDomainGenerator",
    "FixedGenerationStatus",
    "FloatGenerator",
    "Gen",
    "GeneratedFunction",
    "GenerationStatus",
    "Generator",
    "GeneratorConfigurationError",
    "GeometricDistribution",
    "GuaranteeValuesGenerator",
    "InRange",
    "IntegerGenerator",
    "Key",
    "LambdaGenerator",
    "LongGenerator",
    "MapGenerator",
    "NullAllowed",
    "NullableGenerator",
    "OptionalGenerator",
    "Precision",
    "REGISTRY",
    "SamplingDomainGenerator",
    "SetGenerator",
    "ShortGenerator",
    "SimpleGenerationStatus",
    "Size",
    "SourceOfRandomness",
    "StringGenerator",
    "Weighted",
    "factories_for",
    "freq",
    "generate_values",
    "generator_for",
    "register",
    "setup_logging",
    "shrink_path",
]
