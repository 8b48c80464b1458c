"""
acc16emu — Instruction Word Encoding

Word layout (16 bits, no type tag):

   15      11 10                    0
  +----------+-----------------------+
  |  opcode  |        operand        |
  +----------+-----------------------+
     5 bits          11 bits

The operand is an address, a shift count or a branch target depending
on the opcode. 11 bits covers the full 2048-cell address space.

encode() masks both fields, so an out-of-range operand is silently
truncated (encode(ADD, 2048) == encode(ADD, 0)). This matches the
original machine and is not validated.
"""

from ..config import (
    OPERAND_BITS, OPCODE_MASK, OPERAND_MASK, WORD_MASK,
)


def encode(opcode: int, operand: int = 0) -> int:
    """Pack opcode + operand into a 16-bit word."""
    return ((opcode & OPCODE_MASK) << OPERAND_BITS) | (operand & OPERAND_MASK)


def decode_opcode(word: int) -> int:
    """High 5 bits."""
    return (word & WORD_MASK) >> OPERAND_BITS


def decode_operand(word: int) -> int:
    """Low 11 bits."""
    return word & OPERAND_MASK


class Instruction:
    """Read-only instruction view over a word.

    Use Integer (alu.py) for the arithmetic view of the same bits.
    """

    __slots__ = ('_word',)

    def __init__(self, word: int):
        self._word = word & WORD_MASK

    @classmethod
    def new(cls, opcode: int, operand: int = 0) -> 'Instruction':
        return cls(encode(opcode, operand))

    @property
    def word(self) -> int:
        return self._word

    @property
    def opcode(self) -> int:
        return decode_opcode(self._word)

    @property
    def operand(self) -> int:
        return decode_operand(self._word)

    def __eq__(self, other):
        if not isinstance(other, Instruction):
            return NotImplemented
        return self._word == other._word

    def __hash__(self):
        return hash(('Instruction', self._word))

    def __repr__(self):
        return f"Instruction(opcode={self.opcode:05b}, operand={self.operand})"
