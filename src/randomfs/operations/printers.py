"""
Human-readable output formatting.

Centralizes all CLI output formatting so commands stay thin.
"""
from __future__ import annotations

import typer

from ..models import FileRepresentation
from ..stats import Stats
from ..url import RandomURL, encode_url_path


def _format_bytes(size: int) -> str:
    """Format byte count with binary units."""
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if value < 1024 or unit == "GiB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def print_store_summary(url: RandomURL, stats: Stats | None = None) -> None:
    """Print the locator of a freshly stored file."""
    typer.echo(f"URL: {url}")
    typer.echo(f"Hash: {url.rep_hash}")
    typer.echo(f"File: {url.file_name} ({_format_bytes(url.file_size)})")
    typer.echo(f"Web path: /rd/{encode_url_path(url)}")
    if stats is not None:
        print_stats(stats)


def print_retrieve_summary(rep: FileRepresentation, dest: str) -> None:
    """Print where a reconstructed file was written."""
    typer.echo(f"Retrieved {rep.filename} to {dest}")
    typer.echo(f"Size: {_format_bytes(rep.file_size)}")
    typer.echo(f"Content type: {rep.content_type}")
    typer.echo(f"Blocks: {len(rep.block_ids)} x {_format_bytes(rep.block_size)}")


def print_locator(url: RandomURL) -> None:
    """Print the fields of a parsed locator."""
    typer.echo(f"Host: {url.host}")
    typer.echo(f"Version: {url.version}")
    typer.echo(f"File name: {url.file_name}")
    typer.echo(f"File size: {url.file_size}")
    typer.echo(f"Timestamp: {url.timestamp}")
    typer.echo(f"Representation: {url.rep_hash}")


def print_stats(stats: Stats) -> None:
    """Print instance counters."""
    typer.echo("Stats:")
    for name, value in stats.to_dict().items():
        typer.echo(f"  {name}: {value}")
