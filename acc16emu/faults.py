"""
acc16emu — Machine Faults

Every invalid condition stops the machine where it happens. There is no
overflow flag, no trap vector and no retry: the fault is reported with
the program counter (and, when known, the instruction) that caused it.

  UnknownOpcode       — 5-bit opcode with no registry entry
  ArithmeticOverflow  — addition result magnitude above 15 bits
  AddressOutOfRange   — operand or pc outside the memory image
  StepLimitExceeded   — optional step ceiling hit before END
"""

from typing import Optional


class MachineFault(Exception):
    """Base class for all conditions that stop a run."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.pc: Optional[int] = None
        self.mnemonic: Optional[str] = None
        self.operand: Optional[int] = None

    def locate(self, pc: int, mnemonic: Optional[str] = None,
               operand: Optional[int] = None) -> "MachineFault":
        """Attach the failing instruction's location. Returns self."""
        self.pc = pc
        self.mnemonic = mnemonic
        self.operand = operand
        return self

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        where = f"pc {self.pc:04}"
        if self.mnemonic is not None:
            where += f" ({self.mnemonic} {self.operand})"
        elif self.operand is not None:
            where += f" (operand {self.operand})"
        return f"{self.message} at {where}"


class UnknownOpcode(MachineFault):
    def __init__(self, opcode: int):
        super().__init__(f"Unknown op code ({opcode:05b})")
        self.opcode = opcode


class ArithmeticOverflow(MachineFault):
    def __init__(self, left: int, right: int):
        super().__init__(
            f"Magnitude overflow: {left} + {right} does not fit in 15 bits")
        self.left = left
        self.right = right


class AddressOutOfRange(MachineFault):
    def __init__(self, address: int, size: int):
        super().__init__(
            f"Address {address} outside memory (0..{size - 1})")
        self.address = address
        self.size = size


class StepLimitExceeded(MachineFault):
    def __init__(self, limit: int):
        super().__init__(f"Step limit of {limit} reached before END")
        self.limit = limit
