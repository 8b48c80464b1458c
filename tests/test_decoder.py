"""
Opcode Decoder / Registry Tests
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from acc16emu.cpu import decoder, ops
from acc16emu.cpu.decoder import (
    ADD, SUB, STORE, CLEAR, OR, AND, SHIFTR, SHIFTL, BGE, BLT, END,
    ADDR, COUNT, TARGET, UNUSED,
    build_registry, lookup, decode_word, disassemble,
)
from acc16emu.cpu.word import encode
from acc16emu.faults import UnknownOpcode


class TestRegistry:

    def test_eleven_opcodes(self):
        assert len(build_registry()) == 11

    def test_opcode_values(self):
        """Values match the original machine's opcode card."""
        expected = {
            'OR': 0b00000, 'ADD': 0b00001, 'STORE': 0b00010, 'CLEAR': 0b00011,
            'AND': 0b00100, 'SHIFTR': 0b00101, 'SHIFTL': 0b00110, 'BGE': 0b00111,
            'BLT': 0b01000, 'END': 0b01010, 'SUB': 0b10000,
        }
        for mnem, value in expected.items():
            assert lookup(value).mnemonic == mnem

    def test_descriptor_fields(self):
        d = lookup(STORE)
        assert d.opcode == STORE
        assert d.mnemonic == 'STORE'
        assert d.operand_kind == ADDR
        assert d.transition is ops.op_store

    def test_operand_kinds(self):
        assert lookup(SHIFTL).operand_kind == COUNT
        assert lookup(BLT).operand_kind == TARGET
        assert lookup(END).operand_kind == UNUSED

    def test_built_once(self):
        assert build_registry() is build_registry()

    def test_read_only(self):
        registry = build_registry()
        with pytest.raises(TypeError):
            registry[0b01001] = registry[ADD]


class TestDecode:

    def test_decode_word(self):
        descriptor, operand = decode_word(encode(ADD, 4))
        assert descriptor.mnemonic == 'ADD'
        assert operand == 4

    def test_unknown_opcode(self):
        """0b01001 sits between BLT and END but is undefined."""
        with pytest.raises(UnknownOpcode) as exc:
            decode_word(encode(0b01001, 0))
        assert exc.value.opcode == 0b01001
        assert "01001" in str(exc.value)

    def test_every_undefined_opcode_fails(self):
        defined = {OR, ADD, STORE, CLEAR, AND, SHIFTR, SHIFTL, BGE, BLT, END, SUB}
        for op in set(range(32)) - defined:
            with pytest.raises(UnknownOpcode):
                lookup(op)

    def test_custom_registry(self):
        """Callers may pass their own registry; an empty one knows nothing."""
        with pytest.raises(UnknownOpcode):
            lookup(ADD, registry={})


class TestDisassemble:

    def test_formats(self):
        cases = [
            (encode(ADD, 4),     'ADD 4'),
            (encode(SUB, 2047),  'SUB 2047'),
            (encode(CLEAR, 0),   'CLEAR 0'),
            (encode(BGE, 12),    'BGE 12'),
            (encode(END, 0),     'END 0'),
        ]
        for word, expected in cases:
            assert disassemble(word) == expected

    def test_unknown(self):
        assert disassemble(encode(0b11111, 1)) == '???'

    def test_module_constants(self):
        assert decoder.OPCODES[SHIFTR][0] == 'SHIFTR'
