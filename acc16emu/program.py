"""
acc16emu — Instruction Builders + Demonstration Programs

Helpers that assemble single instruction words, so a program image can
be written as a Python list:

    [add(4), add(5), clear(), end(), con(20), con(-30)]

con(n) stores the literal n in sign-magnitude form (con(-30) == 0x801E).
Operands are masked to 11 bits by the encoder, same as the hardware.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .cpu.alu import Integer
from .cpu.decoder import (
    ADD, SUB, STORE, CLEAR, OR, AND, SHIFTR, SHIFTL, BGE, BLT, END,
)
from .cpu.word import encode


def add(n: int) -> int:
    return encode(ADD, n)


def sub(n: int) -> int:
    return encode(SUB, n)


def store(n: int) -> int:
    return encode(STORE, n)


def clear() -> int:
    return encode(CLEAR, 0)


def or_(n: int) -> int:
    return encode(OR, n)


def and_(n: int) -> int:
    return encode(AND, n)


def shiftr(n: int) -> int:
    return encode(SHIFTR, n)


def shiftl(n: int) -> int:
    return encode(SHIFTL, n)


def bge(n: int) -> int:
    return encode(BGE, n)


def blt(n: int) -> int:
    return encode(BLT, n)


def end() -> int:
    return encode(END, 0)


def con(n: int) -> int:
    """Data word holding n as a sign-magnitude integer."""
    return Integer.from_int(n).bits


@dataclass(frozen=True)
class Demo:
    name: str
    description: str
    image: Tuple[int, ...]
    start_pc: int = 0


# ══════════════════════════════════════════════
# Demonstration programs
# ══════════════════════════════════════════════

DEMOS: Dict[str, Demo] = {}


def _demo(name: str, description: str, image, start_pc: int = 0):
    DEMOS[name] = Demo(name, description, tuple(image), start_pc)


_demo('sum', "20 + (-30), then CLEAR", [
    add(4),         # 0: acc = 0 + 20
    add(5),         # 1: acc = 20 + (-30) = -10
    clear(),        # 2: acc = 0
    end(),          # 3
    con(20),        # 4
    con(-30),       # 5
])

_demo('store', "20 + (-30) stored back over the 20", [
    clear(),        # 0
    add(5),         # 1: acc = 20
    add(6),         # 2: acc = -10
    store(5),       # 3: mem[5] = -10
    end(),          # 4
    con(20),        # 5
    con(-30),       # 6
])

_demo('countdown', "count 5 down to -1, storing each value", [
    clear(),        # 0
    add(7),         # 1: acc = 5
    sub(8),         # 2: loop: acc -= 1
    store(9),       # 3: mem[9] = acc
    bge(2),         # 4: while acc >= 0
    end(),          # 5
    con(0),         # 6: unused
    con(5),         # 7
    con(1),         # 8
    con(0),         # 9: last stored value
])

_demo('shift', "-5 << 2 >> 1, magnitude-only shifts", [
    clear(),        # 0
    add(6),         # 1: acc = -5
    shiftl(2),      # 2: acc = -20
    shiftr(1),      # 3: acc = -10
    store(7),       # 4: mem[7] = -10
    end(),          # 5
    con(-5),        # 6
    con(0),         # 7
])
