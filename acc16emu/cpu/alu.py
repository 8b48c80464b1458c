"""
acc16emu — Sign-Magnitude Arithmetic Unit

Integer layout (16 bits):
  bit 15      sign (0 = non-negative, 1 = negative)
  bits 14–0   magnitude (0..32767)

There are two zeros: +0 (0x0000) and -0 (0x8000). Construction from a
Python int never produces -0 for 0, but the operations below can:

  - sub() flips the subtrahend's sign bit without normalising zero,
    so (-0) - (+0) = (-0) + (-0) = -0.
  - shifts keep the sign bit, so (-1) >> 1 = -0.
  - OR / AND work on the raw 16 bits including the sign.

-0 is kept bit-for-bit. Comparisons use is_negative_nonzero, so -0
counts as >= 0 for BGE/BLT.

Operations return a new Integer. Only add() (and sub() through it) can
fail: a same-sign sum above 0x7FFF raises ArithmeticOverflow.
"""

from dataclasses import dataclass

from ..config import WORD_MASK, SIGN_BIT, MAGNITUDE_MASK
from ..faults import ArithmeticOverflow


@dataclass(frozen=True)
class Integer:
    """Read-only sign-magnitude view over a 16-bit word."""

    bits: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'bits', self.bits & WORD_MASK)

    @classmethod
    def from_int(cls, value: int) -> 'Integer':
        """Build from a Python int. Magnitudes above 32767 are truncated
        to their low 15 bits, same as the word encoder."""
        magnitude = abs(value) & MAGNITUDE_MASK
        sign = SIGN_BIT if value < 0 else 0
        return cls(sign | magnitude)

    @property
    def sign_bit(self) -> int:
        return 1 if self.bits & SIGN_BIT else 0

    @property
    def magnitude(self) -> int:
        return self.bits & MAGNITUDE_MASK

    @property
    def is_positive(self) -> bool:
        """Sign bit clear (includes +0)."""
        return not (self.bits & SIGN_BIT)

    @property
    def is_negative_nonzero(self) -> bool:
        """Strictly below zero. -0 is not negative."""
        return bool(self.bits & SIGN_BIT) and self.magnitude != 0

    def to_int(self) -> int:
        if self.bits & SIGN_BIT:
            return -self.magnitude
        return self.magnitude

    def __int__(self):
        return self.to_int()

    def __str__(self):
        return ('-' if self.bits & SIGN_BIT else '') + str(self.magnitude)


ZERO = Integer(0)


def _with_sign(sign: int, magnitude: int) -> Integer:
    return Integer((SIGN_BIT if sign else 0) | magnitude)


def add(a: Integer, b: Integer) -> Integer:
    """a + b in sign-magnitude.

    Same signs: magnitudes add, overflow past 15 bits is fatal.
    Different signs: larger magnitude wins the sign; a tie gives +0.
    """
    if a.sign_bit == b.sign_bit:
        total = a.magnitude + b.magnitude
        if total > MAGNITUDE_MASK:
            raise ArithmeticOverflow(a.to_int(), b.to_int())
        return _with_sign(a.sign_bit, total)

    if a.magnitude > b.magnitude:
        return _with_sign(a.sign_bit, a.magnitude - b.magnitude)
    if b.magnitude > a.magnitude:
        return _with_sign(b.sign_bit, b.magnitude - a.magnitude)
    return ZERO


def flip_sign(a: Integer) -> Integer:
    """Toggle bit 15. Zero is not special-cased."""
    return Integer(a.bits ^ SIGN_BIT)


def sub(a: Integer, b: Integer) -> Integer:
    """a - b, defined as a + flip_sign(b)."""
    return add(a, flip_sign(b))


def bit_or(a: Integer, b: Integer) -> Integer:
    return Integer(a.bits | b.bits)


def bit_and(a: Integer, b: Integer) -> Integer:
    return Integer(a.bits & b.bits)


def shift_right(a: Integer, count: int) -> Integer:
    """Shift the magnitude right; sign bit stays where it is."""
    return _with_sign(a.sign_bit, a.magnitude >> count)


def shift_left(a: Integer, count: int) -> Integer:
    """Shift the magnitude left, dropping bits past bit 14; sign kept."""
    return _with_sign(a.sign_bit, (a.magnitude << count) & MAGNITUDE_MASK)
