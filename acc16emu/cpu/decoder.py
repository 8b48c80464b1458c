"""
acc16emu — Opcode Decoder / Dispatch Table

This module maps the 5-bit opcode field to (mnemonic, operand_kind) and
to the transition function in ops.py. The registry is built once, is
read-only (MappingProxyType) and is handed to each machine instance.

Operand kinds:
  ADDR    Memory address (value read from / written to mem[operand])
  COUNT   Shift count
  TARGET  Branch target (new pc)
  UNUSED  Operand field ignored

Opcode values are the ones used by the original machine, so the table
is not contiguous: 0b01001 and everything from 0b01011 upward except
0b10000 are undefined and decode to UnknownOpcode.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple, Optional, Tuple

from . import ops
from .word import decode_opcode, decode_operand
from ..faults import UnknownOpcode

# ──────────────────────────────────────────────
# Operand kinds
# ──────────────────────────────────────────────

ADDR   = 'ADDR'
COUNT  = 'COUNT'
TARGET = 'TARGET'
UNUSED = 'UNUSED'

# ──────────────────────────────────────────────
# Opcode values
# ──────────────────────────────────────────────

OR     = 0b00000
ADD    = 0b00001
STORE  = 0b00010
CLEAR  = 0b00011
AND    = 0b00100
SHIFTR = 0b00101
SHIFTL = 0b00110
BGE    = 0b00111
BLT    = 0b01000
END    = 0b01010
SUB    = 0b10000

# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: opcode -> (mnemonic, operand_kind, transition)

OPCODES = {
    ADD:    ('ADD',    ADDR,   ops.op_add),
    SUB:    ('SUB',    ADDR,   ops.op_sub),
    STORE:  ('STORE',  ADDR,   ops.op_store),
    CLEAR:  ('CLEAR',  UNUSED, ops.op_clear),
    OR:     ('OR',     ADDR,   ops.op_or),
    AND:    ('AND',    ADDR,   ops.op_and),
    SHIFTR: ('SHIFTR', COUNT,  ops.op_shiftr),
    SHIFTL: ('SHIFTL', COUNT,  ops.op_shiftl),
    BGE:    ('BGE',    TARGET, ops.op_bge),
    BLT:    ('BLT',    TARGET, ops.op_blt),
    END:    ('END',    UNUSED, ops.op_end),
}


class OpcodeDescriptor(NamedTuple):
    opcode: int
    mnemonic: str
    operand_kind: str
    transition: Callable


Registry = Mapping[int, OpcodeDescriptor]


@lru_cache(maxsize=None)
def build_registry() -> Registry:
    """Build the opcode -> descriptor lookup (once per process)."""
    return MappingProxyType({
        opcode: OpcodeDescriptor(opcode, mnem, kind, transition)
        for opcode, (mnem, kind, transition) in OPCODES.items()
    })


def lookup(opcode: int, registry: Optional[Registry] = None) -> OpcodeDescriptor:
    """Resolve an opcode value. Raises UnknownOpcode if undefined."""
    if registry is None:
        registry = build_registry()
    descriptor = registry.get(opcode)
    if descriptor is None:
        raise UnknownOpcode(opcode)
    return descriptor


def decode_word(word: int,
                registry: Optional[Registry] = None) -> Tuple[OpcodeDescriptor, int]:
    """Decode a word as an instruction.

    Returns: (descriptor, operand)
    """
    return lookup(decode_opcode(word), registry), decode_operand(word)


def disassemble(word: int, registry: Optional[Registry] = None) -> str:
    """'ADD 4', 'CLEAR 0', ... or '???' for an undefined opcode."""
    try:
        descriptor, operand = decode_word(word, registry)
    except UnknownOpcode:
        return '???'
    return f"{descriptor.mnemonic} {operand}"
