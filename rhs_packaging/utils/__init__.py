"""
Shared utilities for rhs_packaging.

Common functionality used across contexts:
- Logger setup with provenance
- Build event log (JSON Lines)
- Timestamps
- External command execution
"""

from rhs_packaging.utils.shell import CommandResult, run_command
from rhs_packaging.utils.timestamp import now, now_exact

__all__ = ["CommandResult", "run_command", "now", "now_exact"]
