"""
Operations package - error mapping and output formatting for the CLI.

Keeps CLI commands thin: commands call RandomFS, hand results to printers,
and let run_and_exit translate exceptions into exit codes.
"""
from .mappers import exit_code_for, run_and_exit

__all__ = ["exit_code_for", "run_and_exit"]
