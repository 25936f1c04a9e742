"""
RandomFS CLI

Implements the file verbs on top of a RandomFS instance:
- store: Store a file and print its rd:// locator
- retrieve: Reconstruct a file from a representation hash or rd:// URL
- parse: Show the fields of an rd:// URL (or of its encoded web path form)
- encode: Turn an rd:// URL into its encoded web path form
- ping: Check the IPFS daemon is reachable
"""
from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

import typer

from .cli_context import CLIContext
from .errors import MalformedLocator
from .filesystem import DEFAULT_CONTENT_TYPE
from .operations import run_and_exit
from .operations.printers import print_locator, print_retrieve_summary, print_store_summary
from .storage.ipfs import IpfsContentStore
from .url import RandomURL, decode_url_path, encode_url_path, parse_random_url

app = typer.Typer(name="randomfs", help="RandomFS CLI")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")


def _context(provider: Optional[str]) -> CLIContext:
    if provider == "fake":
        return CLIContext.with_fake_store()
    return CLIContext.from_env()


def _parse_locator(value: str) -> RandomURL:
    """Accept either an rd:// URL or its base64 web path form."""
    value = value.strip()
    if "://" in value:
        return parse_random_url(value)
    return decode_url_path(value)


def _resolve_ref(ref: str) -> str:
    """Representation hash for a bare hash, an rd:// URL or an encoded web path."""
    ref = ref.strip()
    if "://" in ref:
        return parse_random_url(ref).rep_hash
    try:
        return decode_url_path(ref).rep_hash
    except MalformedLocator:
        return ref


@app.command()
def store(
    path: Path = typer.Argument(..., help="File to store"),
    content_type: Optional[str] = typer.Option(None, "--content-type", help="MIME type (guessed from name if omitted)"),
    provider: Optional[str] = typer.Option(None, "--provider", envvar="RANDOMFS_PROVIDER", hidden=True, help="Provider override for testing"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed output")
) -> None:
    """Store a file as randomized blocks."""
    _configure_logging(verbose)

    def _store() -> None:
        if not path.is_file():
            raise ValueError(f"Not a file: {path}")
        data = path.read_bytes()
        mime = content_type or mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE

        fs = _context(provider).fs
        url = fs.store_file(path.name, data, mime)
        print_store_summary(url, fs.get_stats() if verbose else None)

    run_and_exit(_store)


@app.command()
def retrieve(
    ref: str = typer.Argument(..., help="Representation hash, rd:// URL or encoded web path"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output path (defaults to the data dir)"),
    provider: Optional[str] = typer.Option(None, "--provider", envvar="RANDOMFS_PROVIDER", hidden=True, help="Provider override for testing"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed output")
) -> None:
    """Reconstruct a stored file."""
    _configure_logging(verbose)

    def _retrieve() -> None:
        context = _context(provider)
        rep_hash = _resolve_ref(ref)

        data, rep = context.fs.retrieve_file(rep_hash)

        dest = output or Path(context.settings.data_dir) / (rep.filename or rep_hash)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
        print_retrieve_summary(rep, str(dest))

    run_and_exit(_retrieve)


@app.command()
def parse(
    url: str = typer.Argument(..., help="rd:// URL or encoded web path segment")
) -> None:
    """Show the fields of an rd:// URL."""
    run_and_exit(lambda: print_locator(_parse_locator(url)))


@app.command()
def encode(
    url: str = typer.Argument(..., help="rd:// URL to encode")
) -> None:
    """Encode an rd:// URL for use in a /rd/ web path."""
    def _encode() -> None:
        typer.echo(encode_url_path(parse_random_url(url.strip())))

    run_and_exit(_encode)


@app.command()
def ping(
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed output")
) -> None:
    """Check the IPFS daemon is reachable."""
    _configure_logging(verbose)

    def _ping() -> None:
        context = CLIContext.from_env()
        with IpfsContentStore(context.settings) as ipfs:
            version = ipfs.check_connection()
        typer.echo(f"IPFS {version} at {context.settings.ipfs_api}")

    run_and_exit(_ping)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
