"""Code-point shrinking.

Code points shrink toward a preference order rather than toward numeric
zero: lowercase letters, then uppercase letters, digits, the space
character, other whitespace and finally everything else, ties broken by
code point.
"""

from __future__ import annotations

from decimal import Decimal
from enum import IntEnum
from typing import Callable, List, Tuple

from propgen.random_source import SourceOfRandomness

MAX_CODE_POINT = 0x10FFFF
SURROGATES = (0xD800, 0xDFFF)


class CodePointClass(IntEnum):
    LOWERCASE = 0
    UPPERCASE = 1
    DIGIT = 2
    SPACE = 3
    WHITESPACE = 4
    OTHER = 5


_CLASSIFIERS: Tuple[Tuple[CodePointClass, Callable[[str], bool]], ...] = (
    (CodePointClass.LOWERCASE, str.islower),
    (CodePointClass.UPPERCASE, str.isupper),
    (CodePointClass.DIGIT, str.isdigit),
    (CodePointClass.SPACE, lambda c: c == " "),
    (CodePointClass.WHITESPACE, str.isspace),
)

SHRINK_TARGETS_BEFORE_LOWERED = tuple(ord(c) for c in "abc")
SHRINK_TARGETS_AFTER_LOWERED = tuple(ord(c) for c in "ABC123 \n")


def is_surrogate(code_point: int) -> bool:
    return SURROGATES[0] <= code_point <= SURROGATES[1]


def is_legal(code_point: int) -> bool:
    return 0 <= code_point <= MAX_CODE_POINT and not is_surrogate(code_point)


def classify(code_point: int) -> CodePointClass:
    character = chr(code_point)
    for kind, matches in _CLASSIFIERS:
        if matches(character):
            return kind
    return CodePointClass.OTHER


def preference(code_point: int) -> Tuple[int, int]:
    return (int(classify(code_point)), code_point)


def magnitude(code_point: int) -> Decimal:
    """Scalar form of ``preference``: smaller means more preferred."""
    return Decimal(int(classify(code_point)) * (MAX_CODE_POINT + 1) + code_point)


class CodePointShrink:
    def __init__(self, permitted: Callable[[int], bool]):
        self._permitted = permitted

    def shrink(self, random: SourceOfRandomness, larger: int) -> List[int]:
        candidates = list(SHRINK_TARGETS_BEFORE_LOWERED)
        character = chr(larger)
        if character.isupper():
            lowered = character.lower()
            # Some uppercase letters lower to more than one code point.
            if len(lowered) == 1:
                candidates.append(ord(lowered))
        candidates.extend(SHRINK_TARGETS_AFTER_LOWERED)

        current = preference(larger)
        shrinks: List[int] = []
        for each in candidates:
            if each in shrinks or not self._permitted(each):
                continue
            if preference(each) < current:
                shrinks.append(each)
        return shrinks
