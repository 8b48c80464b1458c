"""
acc16emu — Main Emulator Class

Integrates:
  - Registers (cpu/regs.py)
  - Memory (mem/memory.py)
  - Opcode registry (cpu/decoder.py)
  - Transitions + arithmetic unit (cpu/ops.py, cpu/alu.py)

Execution model (one step):
  1. Fetch the word at pc
  2. Decode opcode → descriptor (UnknownOpcode if undefined)
  3. END → Halted, registers untouched
  4. Otherwise apply descriptor.transition → new registers
  5. Emit a TraceRecord (pc, mnemonic, operand, acc before/after)

Termination reasons:
  - HALT:        END decoded
  - BREAK:       breakpoint address reached
  - STEP_LIMIT:  max_steps executed without reaching END
  - FAULT:       UnknownOpcode / ArithmeticOverflow / AddressOutOfRange

The machine itself never prints. Trace records go to observers, the
optional text trace buffer and the DEBUG log.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Set, Union

from .config import DEFAULT_MAX_STEPS
from .cpu.alu import Integer, ZERO
from .cpu.decoder import END, build_registry, decode_word
from .cpu.regs import Registers
from .cpu.word import decode_opcode, decode_operand
from .faults import MachineFault, StepLimitExceeded
from .mem.memory import Memory

log = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    BREAK = 'BREAK'
    STEP_LIMIT = 'STEP_LIMIT'
    FAULT = 'FAULT'


@dataclass(frozen=True)
class TraceRecord:
    """One executed instruction."""
    pc: int
    mnemonic: str
    operand: int
    acc_before: Integer
    acc_after: Integer

    def format(self) -> str:
        return (f"{self.pc:04}: {self.mnemonic} {self.operand}"
                f"\tacc: {str(self.acc_before):>6} => {str(self.acc_after):>6}")


@dataclass(frozen=True)
class StepResult:
    """Outcome of step(): exactly one of record / stop is set; fault is
    set together with stop=FAULT."""
    record: Optional[TraceRecord] = None
    stop: Optional[StopReason] = None
    fault: Optional[MachineFault] = None


@dataclass
class RunResult:
    registers: Registers
    memory: List[int]
    reason: StopReason
    trace: List[TraceRecord] = field(default_factory=list)


class AccumulatorMachine:
    """Sign-magnitude accumulator machine.

    Usage:
        emu = AccumulatorMachine([add(4), add(5), clear(), end(),
                                  con(20), con(-30)])
        emu.run()                    # StopReason.HALT
        print(emu.regs.display())    # pc: 0003; acc:      0
    """

    def __init__(self, memory: Union[Memory, Iterable[int]], start_pc: int = 0,
                 max_steps: Optional[int] = DEFAULT_MAX_STEPS):
        if not isinstance(memory, Memory):
            memory = Memory(memory)
        self.mem = memory
        self.max_steps = max_steps
        self._registry = build_registry()

        self.regs = Registers(ZERO, start_pc)
        self.halted = False
        self.fault: Optional[MachineFault] = None
        self.steps_executed = 0

        # Breakpoints: set of pc values that stop run() with BREAK
        self._breakpoints: Set[int] = set()

        # Trace output
        self._trace = False
        self._trace_output: List[str] = []
        self._observers: List[Callable[[TraceRecord], None]] = []

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> StepResult:
        """Execute one instruction. Machine faults are returned, not raised."""
        if self.halted:
            return StepResult(stop=StopReason.HALT)

        pc = self.regs.pc

        # Fetch
        try:
            word = self.mem.read(pc)
        except MachineFault as fault:
            return self._stop_on_fault(fault.locate(pc))

        # Decode
        try:
            descriptor, operand = decode_word(word, self._registry)
        except MachineFault as fault:
            return self._stop_on_fault(fault.locate(pc, operand=decode_operand(word)))

        if descriptor.opcode == END:
            self.halted = True
            log.info("Halted at pc %04d after %d steps", pc, self.steps_executed)
            return StepResult(stop=StopReason.HALT)

        # Execute
        acc_before = self.regs.acc
        try:
            regs = descriptor.transition(operand, self.regs, self.mem)
        except MachineFault as fault:
            return self._stop_on_fault(fault.locate(pc, descriptor.mnemonic, operand))

        self.regs = regs
        self.steps_executed += 1

        record = TraceRecord(pc, descriptor.mnemonic, operand, acc_before, regs.acc)
        log.debug("%s", record.format())
        if self._trace:
            self._trace_output.append(record.format())
        for observer in self._observers:
            observer(record)
        return StepResult(record=record)

    def _stop_on_fault(self, fault: MachineFault) -> StepResult:
        self.fault = fault
        log.warning("%s", fault)
        return StepResult(stop=StopReason.FAULT, fault=fault)

    def _at_end(self) -> bool:
        pc = self.regs.pc
        return 0 <= pc < len(self.mem) and decode_opcode(self.mem.read(pc)) == END

    def _limit_reached(self, max_steps: Optional[int], executed: int) -> bool:
        """True (with self.fault set) once max_steps ran and pc is not at END."""
        if max_steps is None or executed < max_steps or self._at_end():
            return False
        self.fault = StepLimitExceeded(max_steps).locate(self.regs.pc)
        log.warning("%s", self.fault)
        return True

    def run(self, max_steps: Optional[int] = None,
            raise_on_fault: bool = True) -> StopReason:
        """Run until termination condition.

        Args:
            max_steps: Instructions to execute before STEP_LIMIT. None
                falls back to the machine's max_steps, so a ceiling set on
                the machine cannot be lifted per call; set emu.max_steps =
                None for that.
            raise_on_fault: Re-raise the MachineFault (including
                StepLimitExceeded) instead of returning FAULT/STEP_LIMIT.
                The fault is kept in self.fault either way.

        Returns:
            StopReason indicating why execution stopped
        """
        if max_steps is None:
            max_steps = self.max_steps

        self.fault = None
        executed = 0
        while True:
            if self._limit_reached(max_steps, executed):
                if raise_on_fault:
                    raise self.fault
                return StopReason.STEP_LIMIT

            if executed and self.regs.pc in self._breakpoints:
                return StopReason.BREAK

            result = self.step()
            if result.fault is not None:
                if raise_on_fault:
                    raise result.fault
                return StopReason.FAULT
            if result.stop is not None:
                return result.stop
            executed += 1

    def steps(self, max_steps: Optional[int] = None) -> Iterator[TraceRecord]:
        """Yield a TraceRecord per executed instruction until END.

        Faults, including StepLimitExceeded, are raised from the generator.
        max_steps falls back to the machine's ceiling as in run().
        """
        if max_steps is None:
            max_steps = self.max_steps

        executed = 0
        while True:
            if self._limit_reached(max_steps, executed):
                raise self.fault
            result = self.step()
            if result.fault is not None:
                raise result.fault
            if result.stop is not None:
                return
            executed += 1
            yield result.record

    # ══════════════════════════════════════════════
    # Breakpoint API
    # ══════════════════════════════════════════════

    def add_breakpoint(self, addr: int):
        """Stop run() before executing the instruction at addr."""
        self._breakpoints.add(addr)

    def remove_breakpoint(self, addr: int):
        self._breakpoints.discard(addr)

    def clear_breakpoints(self):
        self._breakpoints.clear()

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def add_observer(self, callback: Callable[[TraceRecord], None]):
        """callback(record) is called after every executed instruction."""
        self._observers.append(callback)

    def enable_trace(self, enable: bool = True):
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def dump(self) -> str:
        return self.mem.format_dump(self._registry)

    def reset(self, start_pc: int = 0):
        """Back to Running with acc = 0. Memory is left as is."""
        self.regs = Registers(ZERO, start_pc)
        self.halted = False
        self.fault = None
        self.steps_executed = 0
        self._trace_output.clear()


def run_program(words: Iterable[int], start_pc: int = 0,
                max_steps: Optional[int] = None) -> RunResult:
    """Load words into a fresh machine and run it to completion.

    Faults propagate to the caller.
    """
    emu = AccumulatorMachine(words, start_pc=start_pc, max_steps=max_steps)
    trace: List[TraceRecord] = []
    emu.add_observer(trace.append)
    reason = emu.run()
    return RunResult(emu.regs, emu.mem.words(), reason, trace)
