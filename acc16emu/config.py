"""
acc16emu — Machine Constants
============================

Fixed parameters of the accumulator machine. The widths below define
the instruction format and the arithmetic unit; nothing here is meant
to be changed at runtime. Per-run knobs (start address, step ceiling,
logging) are passed as arguments or CLI flags instead.
"""

# =============================================================================
#  WORD FORMAT
# =============================================================================
WORD_BITS = 16
WORD_MASK = (1 << WORD_BITS) - 1          # 0xFFFF

OPCODE_BITS = 5
OPERAND_BITS = 11
OPCODE_MASK = (1 << OPCODE_BITS) - 1      # 0x1F
OPERAND_MASK = (1 << OPERAND_BITS) - 1    # 0x7FF


# =============================================================================
#  SIGN-MAGNITUDE INTEGER
# =============================================================================
SIGN_BIT = 1 << (WORD_BITS - 1)           # 0x8000
MAGNITUDE_BITS = WORD_BITS - 1
MAGNITUDE_MASK = SIGN_BIT - 1             # 0x7FFF


# =============================================================================
#  MEMORY
# =============================================================================
# The operand field addresses exactly this many cells.
MAX_MEM = 1 << OPERAND_BITS               # 2048


# =============================================================================
#  EXECUTION
# =============================================================================
# None = run until END, like the hardware. Set a ceiling to guard
# against programs without a reachable END.
DEFAULT_MAX_STEPS = None


# =============================================================================
#  LOGGING
# =============================================================================
LOGGER_NAME = "acc16emu"
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
CONSOLE_LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
