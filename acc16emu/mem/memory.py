"""
acc16emu — Flat Word Memory

Memory is a fixed-size list of 16-bit words, addresses 0..N-1 with
N <= 2048 (the reach of the 11-bit operand). Code and data share it.
The size is fixed when the image is loaded; nothing is added or removed
during a run, and only STORE writes to it.

Every access is bounds checked. An address at or past the end of the
image raises AddressOutOfRange instead of wrapping.

Words carry no type. Callers pick a view explicitly:
  read()              raw bits
  read_integer()      sign-magnitude Integer
  read_instruction()  Instruction (opcode + operand)
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from ..config import MAX_MEM, WORD_MASK
from ..cpu.alu import Integer
from ..cpu.decoder import Registry, disassemble
from ..cpu.word import Instruction
from ..faults import AddressOutOfRange


@dataclass(frozen=True)
class DumpEntry:
    """One memory cell seen through both views."""
    address: int
    raw_bits: int
    integer: Integer
    instruction: Instruction
    disassembly: str

    def format(self) -> str:
        return (f"{self.address:04}: {self.raw_bits:016b}  "
                f"{str(self.integer):>6}  {self.disassembly}")


class Memory:
    """Fixed-size word memory.

    Usage:
        mem = Memory([add(4), add(5), clear(), end(), con(20), con(-30)])
        mem.read_integer(4)      # Integer 20
        mem.write(5, 0x800A)     # -10
    """

    def __init__(self, words: Iterable[int] = (), size: Optional[int] = None):
        image = list(words)
        if size is None:
            size = len(image)
        if not 0 <= size <= MAX_MEM:
            raise ValueError(f"Memory size {size} outside 0..{MAX_MEM}")
        if len(image) > size:
            raise ValueError(
                f"Image of {len(image)} words does not fit in {size} cells")
        for addr, word in enumerate(image):
            if not 0 <= word <= WORD_MASK:
                raise ValueError(
                    f"Word {word} at address {addr} is not a 16-bit value")

        self._mem: List[int] = image + [0] * (size - len(image))

        # Watchpoints: addr -> [callback(addr, old, new)]
        self._watchpoints: Dict[int, List[Callable]] = {}

    def __len__(self):
        return len(self._mem)

    @property
    def size(self) -> int:
        return len(self._mem)

    def _check(self, addr: int):
        if not 0 <= addr < len(self._mem):
            raise AddressOutOfRange(addr, len(self._mem))

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        self._check(addr)
        return self._mem[addr]

    def write(self, addr: int, word: int):
        """Write a raw word. Watchpoint callbacks fire after the write."""
        self._check(addr)
        word &= WORD_MASK
        old = self._mem[addr]
        self._mem[addr] = word
        for cb in self._watchpoints.get(addr, ()):
            cb(addr, old, word)

    def read_integer(self, addr: int) -> Integer:
        return Integer(self.read(addr))

    def read_instruction(self, addr: int) -> Instruction:
        return Instruction(self.read(addr))

    # --- Watchpoints ---

    def add_watchpoint(self, addr: int, callback: Callable):
        """callback(addr, old_word, new_word) is called on every write."""
        self._check(addr)
        self._watchpoints.setdefault(addr, []).append(callback)

    def remove_watchpoint(self, addr: int, callback: Optional[Callable] = None):
        """Remove a watchpoint. If callback is None, removes all on that addr."""
        if addr in self._watchpoints:
            if callback is None:
                del self._watchpoints[addr]
            else:
                self._watchpoints[addr] = [
                    cb for cb in self._watchpoints[addr] if cb != callback
                ]

    # --- Snapshots ---

    def snapshot(self) -> tuple:
        return tuple(self._mem)

    def words(self) -> List[int]:
        return list(self._mem)

    @staticmethod
    def diff_snapshots(snap_a, snap_b) -> Dict[int, tuple]:
        """Compare two snapshots, return {addr: (old, new)} for changes."""
        changes = {}
        for addr in range(min(len(snap_a), len(snap_b))):
            if snap_a[addr] != snap_b[addr]:
                changes[addr] = (snap_a[addr], snap_b[addr])
        return changes

    # --- Dump ---

    def dump(self, registry: Optional[Registry] = None) -> List[DumpEntry]:
        """Every cell with its raw bits, integer view and instruction view."""
        return [
            DumpEntry(
                address=addr,
                raw_bits=word,
                integer=Integer(word),
                instruction=Instruction(word),
                disassembly=disassemble(word, registry),
            )
            for addr, word in enumerate(self._mem)
        ]

    def format_dump(self, registry: Optional[Registry] = None) -> str:
        return '\n'.join(entry.format() for entry in self.dump(registry))
