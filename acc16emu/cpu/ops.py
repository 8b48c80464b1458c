"""
acc16emu — Instruction Transitions

One function per opcode with the signature:

    transition(operand, regs, memory) -> Registers

operand is the 11-bit field of the instruction word. Only op_store
writes memory; every other transition is a pure function of its inputs.
Memory reads go through Memory.read_integer(), which bounds-checks the
address and raises AddressOutOfRange.
"""

from . import alu
from .alu import ZERO
from .regs import Registers


# ── Arithmetic ──

def op_add(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(alu.add(regs.acc, memory.read_integer(operand)))


def op_sub(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(alu.sub(regs.acc, memory.read_integer(operand)))


def op_clear(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(ZERO)


# ── Store ──

def op_store(operand: int, regs: Registers, memory) -> Registers:
    memory.write(operand, regs.acc.bits)
    return regs.advance()


# ── Logic (full 16-bit pattern) ──

def op_or(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(alu.bit_or(regs.acc, memory.read_integer(operand)))


def op_and(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(alu.bit_and(regs.acc, memory.read_integer(operand)))


# ── Shifts (operand = count) ──

def op_shiftr(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(alu.shift_right(regs.acc, operand))


def op_shiftl(operand: int, regs: Registers, memory) -> Registers:
    return regs.advance(alu.shift_left(regs.acc, operand))


# ── Branches (operand = target) ──

def op_bge(operand: int, regs: Registers, memory) -> Registers:
    if not regs.acc.is_negative_nonzero:
        return regs.jump(operand)
    return regs.advance()


def op_blt(operand: int, regs: Registers, memory) -> Registers:
    if regs.acc.is_negative_nonzero:
        return regs.jump(operand)
    return regs.advance()


# ── Control ──

def op_end(operand: int, regs: Registers, memory) -> Registers:
    # The engine stops before calling this; kept so END has a descriptor
    # like every other opcode.
    return regs
