# acc16emu — Sign-magnitude 16-bit accumulator machine emulator
#
# Layout:
#   cpu/word.py     — 5-bit opcode + 11-bit operand word encoding
#   cpu/alu.py      — sign-magnitude arithmetic unit (Integer view)
#   cpu/regs.py     — accumulator + program counter
#   cpu/decoder.py  — opcode table / registry / disassembly
#   cpu/ops.py      — per-opcode state transitions
#   mem/memory.py   — flat word memory (max 2048 cells)
#   emu.py          — fetch/execute loop
#   program.py      — instruction builders + demo programs

__version__ = "1.0.0"
