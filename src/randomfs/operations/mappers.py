"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and CLI command wrappers
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

import typer

T = TypeVar('T')

logger = logging.getLogger(__name__)

EXIT_CODES = {
    "NotFound": 1,
    "MalformedLocator": 2,
    "ConfigurationError": 2,
    "ValueError": 2,
    "StoreUnavailable": 3,
    "StoreRejected": 4,
    "ReconstructionFailed": 5,
}

FALLBACK_EXIT_CODE = 3


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    - 0: Success
    - 1: Representation or block not found (NotFound)
    - 2: Bad input or configuration (MalformedLocator, ConfigurationError, ValueError)
    - 3: Content store unreachable (StoreUnavailable) or unknown error
    - 4: Content store refused the request (StoreRejected)
    - 5: File could not be reassembled (ReconstructionFailed)
    """
    return EXIT_CODES.get(type(exc).__name__, FALLBACK_EXIT_CODE)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function and maps any exceptions to appropriate
    exit codes using typer.Exit, after printing the error to stderr.

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except typer.Exit:
        raise
    except Exception as e:
        logger.debug("command failed", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=exit_code_for(e)) from e
