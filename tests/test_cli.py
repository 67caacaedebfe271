# =============================================================================
# test_cli.py - Command-Line Interface Tests
# =============================================================================
# Tests for the bfc command: stdin/stdout handling, exit codes, flags and
# environment configuration.
# =============================================================================

import os
import subprocess
import sys
import warnings
from pathlib import Path

import pytest
from click.testing import CliRunner

from bfc.cli.bfc import main
from bfc.cli.errors import ExitCode


SRC_DIR = Path(__file__).resolve().parent.parent / "src"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# =============================================================================
# Basic Execution Tests
# =============================================================================

class TestRun:
    """Test running programs through the CLI."""

    def test_hello_world(self, runner, hello_world):
        result = runner.invoke(main, [], input=hello_world)
        assert result.exit_code == ExitCode.SUCCESS
        assert result.stdout_bytes == b"Hello World!\n"

    def test_empty_program(self, runner):
        result = runner.invoke(main, [], input=b"")
        assert result.exit_code == 0
        assert result.stdout_bytes == b""

    def test_empty_loop(self, runner):
        result = runner.invoke(main, [], input=b"[]")
        assert result.exit_code == 0
        assert result.stdout_bytes == b""

    def test_input_at_eof(self, runner):
        """Source consumes the stream, so ',' sees end-of-input (255)."""
        result = runner.invoke(main, [], input=b",.")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"\xff"

    def test_no_deprecation_warnings(self, runner, hello_world):
        """Standard streams are used without deprecated click helpers."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = runner.invoke(main, [], input=hello_world)
        assert result.stdout_bytes == b"Hello World!\n"
        assert not [
            w for w in caught
            if issubclass(w.category, DeprecationWarning)
            and "get_binary_stream" in str(w.message)
        ]

    def test_binary_output(self, runner):
        """Output bytes are written unmodified, including non-ASCII."""
        result = runner.invoke(main, [], input=b"-.-.")
        assert result.stdout_bytes == b"\xff\xfe"


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestErrors:
    """Test exit codes and error messages."""

    def test_unmatched_open(self, runner):
        result = runner.invoke(main, [], input=b"+[")
        assert result.exit_code == ExitCode.FAILURE
        assert "error: unmatched '[' at token 1" in result.output

    def test_unmatched_close(self, runner):
        result = runner.invoke(main, [], input=b"+.]")
        assert result.exit_code == 1
        assert "error: unmatched ']' at token 2" in result.output

    def test_no_output_when_rejected(self, runner):
        """A rejected program writes nothing but the error line."""
        result = runner.invoke(main, [], input=b"+" * 65 + b".[")
        assert result.exit_code == 1
        assert b"A" not in result.stdout_bytes

    def test_capacity_exceeded(self, runner):
        result = runner.invoke(main, [], input=b"+" * 30_000)
        assert result.exit_code == 1
        assert "program exceeds available memory" in result.output

    def test_pointer_out_of_bounds(self, runner):
        result = runner.invoke(main, [], input=b"<")
        assert result.exit_code == 1
        assert "outside tape" in result.output


# =============================================================================
# Option Tests
# =============================================================================

class TestOptions:
    """Test command-line flags."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Compile and run a program" in result.output

    def test_dump(self, runner):
        """--dump prints the listing and does not execute."""
        result = runner.invoke(main, ["--dump"], input=b"+++[-]." + b"<")
        assert result.exit_code == 0
        assert "0000  ADD   3" in result.output
        assert "0001  JZ    -> 0003" in result.output
        assert "HALT" in result.output

    def test_dump_no_optimize(self, runner):
        result = runner.invoke(main, ["--dump", "--no-optimize"], input=b"++")
        assert result.output.splitlines() == [
            "0000  ADD   1",
            "0001  ADD   1",
            "0002  HALT",
        ]

    def test_no_optimize_runs(self, runner, hello_world):
        result = runner.invoke(main, ["--no-optimize"], input=hello_world)
        assert result.exit_code == 0
        assert result.stdout_bytes == b"Hello World!\n"

    def test_eof_value(self, runner):
        result = runner.invoke(main, ["--eof-value", "0"], input=b",+.")
        assert result.stdout_bytes == b"\x01"

    def test_eof_value_out_of_range(self, runner):
        result = runner.invoke(main, ["--eof-value", "256"], input=b"")
        assert result.exit_code == 2

    def test_pointer_policy_wrap(self, runner):
        result = runner.invoke(
            main, ["--pointer-policy", "wrap", "--tape-length", "10"], input=b"<+."
        )
        assert result.exit_code == 0
        assert result.stdout_bytes == b"\x01"

    def test_tape_length_bounds_program(self, runner):
        result = runner.invoke(main, ["--tape-length", "5"], input=b"++++")
        assert result.exit_code == 1
        assert "more than 3 instructions" in result.output

    def test_verbose_reports_stats(self, runner):
        result = runner.invoke(main, ["-v"], input=b"+++.")
        assert result.exit_code == 0
        assert "Optimization Statistics" in result.output


# =============================================================================
# Environment Tests
# =============================================================================

class TestEnvironment:
    """Test BFC_* environment variables and their precedence."""

    def test_env_eof_value(self, runner):
        result = runner.invoke(main, [], input=b",.", env={"BFC_EOF_VALUE": "7"})
        assert result.stdout_bytes == b"\x07"

    def test_flag_overrides_env(self, runner):
        result = runner.invoke(
            main, ["--eof-value", "9"], input=b",.", env={"BFC_EOF_VALUE": "7"}
        )
        assert result.stdout_bytes == b"\x09"

    def test_env_pointer_policy(self, runner):
        result = runner.invoke(
            main, [], input=b"<+.", env={"BFC_POINTER_POLICY": "wrap"}
        )
        assert result.exit_code == 0
        assert result.stdout_bytes == b"\x01"


# =============================================================================
# Process Tests
# =============================================================================

class TestProcess:
    """Run ``python -m bfc`` as a real process."""

    def _run(self, source: bytes, timeout: float) -> subprocess.CompletedProcess:
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
        )
        return subprocess.run(
            [sys.executable, "-m", "bfc"],
            input=source,
            capture_output=True,
            timeout=timeout,
            env=env,
        )

    def test_hello_world_process(self, hello_world):
        completed = self._run(hello_world, timeout=30)
        assert completed.returncode == 0
        assert completed.stdout == b"Hello World!\n"
        assert completed.stderr == b""

    def test_error_process(self):
        completed = self._run(b"[[]", timeout=30)
        assert completed.returncode == 1
        assert completed.stdout == b""
        assert completed.stderr.decode().strip() == "error: unmatched '[' at token 0"

    def test_non_terminating_program(self):
        """'+[]' never halts; it has to be stopped from outside."""
        with pytest.raises(subprocess.TimeoutExpired):
            self._run(b"+[]", timeout=2)
