"""
acc16emu — CPU Register Set

Register model:
  acc — accumulator (sign-magnitude Integer)
  pc  — program counter (index into memory)

Registers are immutable: each executed instruction produces a new
Registers value from the old one.
"""

from dataclasses import dataclass
from typing import Optional

from .alu import Integer, ZERO


@dataclass(frozen=True)
class Registers:

    acc: Integer = ZERO
    pc: int = 0

    def advance(self, acc: Optional[Integer] = None) -> 'Registers':
        """pc + 1, optionally with a new accumulator."""
        return Registers(self.acc if acc is None else acc, self.pc + 1)

    def jump(self, target: int) -> 'Registers':
        return Registers(self.acc, target)

    def display(self) -> str:
        """Format register state, e.g. 'pc: 0003; acc:    -10'."""
        return f"pc: {self.pc:04}; acc: {str(self.acc):>6}"

    def __str__(self):
        return self.display()
