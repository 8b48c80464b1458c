"""
acc16kit CLI Tests

Commands are called through main(argv) and their stdout/stderr checked
with capsys.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

import acc16kit


def _run(capsys, *argv):
    code = acc16kit.main(['--no-rich', *argv])
    out, err = capsys.readouterr()
    return code, out, err


class TestCommands:

    def test_no_command_prints_help(self, capsys):
        code, out, _ = _run(capsys)
        assert code == 0
        assert "commands:" in out

    def test_demos(self, capsys):
        code, out, _ = _run(capsys, 'demos')
        assert code == 0
        for name in ('sum', 'store', 'countdown', 'shift'):
            assert name in out

    def test_run_prints_trace_and_registers(self, capsys):
        code, out, _ = _run(capsys, 'run', 'sum')
        assert code == 0
        assert out.split('\n')[:4] == [
            "0000: ADD 4\tacc:      0 =>     20",
            "0001: ADD 5\tacc:     20 =>    -10",
            "0002: CLEAR 0\tacc:    -10 =>      0",
            "pc: 0003; acc:      0",
        ]

    def test_run_quiet(self, capsys):
        code, out, _ = _run(capsys, 'run', 'store', '--quiet')
        assert code == 0
        assert out.strip() == "pc: 0004; acc:    -10"

    def test_run_dump(self, capsys):
        code, out, _ = _run(capsys, 'run', 'store', '-q', '--dump')
        assert code == 0
        assert "0005: 1000000000001010     -10  SUB 10" in out

    def test_run_step_limit(self, capsys):
        code, _, err = _run(capsys, 'run', 'countdown', '-q', '--max-steps', '5')
        assert code == 1
        assert "STEP_LIMIT" in err

    def test_run_bad_start(self, capsys):
        """Starting outside the image faults on the first fetch."""
        code, _, err = _run(capsys, 'run', 'sum', '-q', '--start', '9')
        assert code == 1
        assert "FAULT" in err

    def test_size_too_small(self, capsys):
        code, _, err = _run(capsys, 'run', 'sum', '--size', '2')
        assert code == 1
        assert "does not fit" in err

    def test_dump(self, capsys):
        code, out, _ = _run(capsys, 'dump', 'sum', '--size', '8')
        assert code == 0
        lines = out.strip().split('\n')
        assert len(lines) == 8
        assert lines[0] == "0000: 0000100000000100    2052  ADD 4"

    def test_unknown_demo(self, capsys):
        with pytest.raises(SystemExit):
            acc16kit.main(['run', 'nope'])

    def test_log_file(self, capsys, tmp_path):
        code, _, _ = _run(capsys, '--log-file', str(tmp_path), 'run', 'sum', '-q')
        assert code == 0
        logs = list(tmp_path.glob('acc16emu_*.log'))
        assert len(logs) == 1
        assert "Halted at pc 0003" in logs[0].read_text(encoding='utf-8')
