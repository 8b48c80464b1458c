"""
Word Encoding Tests

Bit layout of the 16-bit instruction word: 5-bit opcode in bits 15–11,
11-bit operand in bits 10–0.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from acc16emu.cpu.word import encode, decode_opcode, decode_operand, Instruction
from acc16emu.cpu.decoder import ADD, SUB, END


class TestEncode:

    def test_layout(self):
        """ADD 4 → 00001 00000000100 = $0804"""
        assert encode(ADD, 4) == 0x0804

    def test_sub_sets_bit_15(self):
        """SUB is 0b10000, so its words have the top bit set."""
        assert encode(SUB, 0) == 0x8000

    def test_fields_survive_packing(self):
        """Every opcode with boundary operands decodes back unchanged."""
        for op in range(32):
            for operand in (0, 1, 0x3FF, 0x400, 0x7FE, 0x7FF):
                word = encode(op, operand)
                assert decode_opcode(word) == op
                assert decode_operand(word) == operand

    def test_operand_truncated_to_11_bits(self):
        """2048 does not fit the operand field and wraps to 0."""
        assert encode(ADD, 2048) == encode(ADD, 0)
        assert decode_operand(encode(ADD, 0x801)) == 1

    def test_opcode_truncated_to_5_bits(self):
        assert decode_opcode(encode(0b100001, 3)) == 0b00001

    def test_default_operand(self):
        assert encode(END) == END << 11


class TestInstructionView:

    def test_fields(self):
        instr = Instruction(0x0804)
        assert instr.opcode == ADD
        assert instr.operand == 4
        assert instr.word == 0x0804

    def test_new(self):
        assert Instruction.new(ADD, 4) == Instruction(0x0804)

    def test_word_masked(self):
        assert Instruction(0x1_0804).word == 0x0804

    def test_repr(self):
        assert repr(Instruction.new(ADD, 4)) == "Instruction(opcode=00001, operand=4)"
