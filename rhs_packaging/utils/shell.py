"""
External command execution.

Every external tool (git, tar, soffice, aws) is invoked through run_command so
that output capture and decoding behave the same everywhere.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence


@dataclass
class CommandResult:
    """
    Result of an external command.

    Attributes:
        args: Command line that was executed
        returncode: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
    """
    Run a command to completion and capture its output.

    A missing executable is reported as a failed CommandResult (returncode 127)
    rather than an exception, so callers only have one failure path to handle.

    Args:
        args: Command and arguments
        cwd: Working directory for the command (default: current directory)

    Returns:
        CommandResult with exit status and decoded output
    """
    args = [str(arg) for arg in args]
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
        )
    except FileNotFoundError as e:
        return CommandResult(args=args, returncode=127, stderr=str(e))

    return CommandResult(
        args=args,
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )
