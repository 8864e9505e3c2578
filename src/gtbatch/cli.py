"""CLI interface for gtbatch using Typer."""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gtbatch import __version__
from gtbatch.backends.base import TranslationBackend, split_batches
from gtbatch.config import TranslatorOptions, cors_proxy, identity_url
from gtbatch.core.errors import TranslationError
from gtbatch.core.languages import AUTO, DEFAULT_LANGUAGES
from gtbatch.reporting.report import TranslationReport


class BackendChoice(str, Enum):
    google_free = "google-free"
    google = "google"
    dummy = "dummy"


app = typer.Typer(
    name="gtbatch",
    help="Batch text translation through the Google Translate web endpoints.",
    add_completion=False,
)
console = Console()

_verbose = False
_quiet = False


def _print(msg: str, *, verbose_only: bool = False) -> None:
    """Print respecting --verbose/--quiet flags. Errors bypass --quiet."""
    if _quiet:
        return
    if verbose_only and not _verbose:
        return
    console.print(msg)


def _create_backend(
    backend: BackendChoice,
    *,
    token: str | None = None,
    proxy: str | None = None,
    use_dummy: bool = False,
) -> tuple[TranslationBackend, str]:
    """Create a translation backend instance.

    Returns:
        Tuple of (backend_instance, backend_label_for_report).
    """
    from gtbatch.backends.dummy import DummyBackend

    if use_dummy:
        backend = BackendChoice.dummy

    if backend == BackendChoice.dummy:
        return DummyBackend(), "dummy"

    from gtbatch.backends.google import GoogleBackend, GoogleTokenFreeBackend

    options = TranslatorOptions(url_rewriter=cors_proxy(proxy) if proxy else identity_url)
    if backend == BackendChoice.google:
        if not token:
            console.print(
                "[red]Error:[/red] The google backend requires a token."
                " Use --token or set GTBATCH_TOKEN."
            )
            raise typer.Exit(1)
        from gtbatch.token import static_token
        return GoogleBackend(static_token(token), options), "google"

    return GoogleTokenFreeBackend(options), "google-free"


def _collect_texts(texts: list[str] | None, input_file: Path | None) -> list[str]:
    collected = list(texts or [])
    if input_file is not None:
        if not input_file.exists():
            console.print(f"[red]Error:[/red] File not found: {input_file}")
            raise typer.Exit(1)
        lines = input_file.read_text(encoding="utf-8").splitlines()
        collected.extend(line for line in lines if line.strip())
    if not collected:
        console.print("[red]Error:[/red] Nothing to translate. Pass TEXT or --input.")
        raise typer.Exit(1)
    return collected


async def _translate_batches(
    backend: TranslationBackend,
    batches: list[list[str]],
    lang: str,
    source: str,
    report: TranslationReport,
) -> list[str | None]:
    """Translate all batches concurrently. Failed batches yield None per segment."""
    async with backend:
        outcomes = await asyncio.gather(
            *(backend.translate_batch(batch, lang, source) for batch in batches),
            return_exceptions=True,
        )

    translations: list[str | None] = []
    for batch, outcome in zip(batches, outcomes):
        if isinstance(outcome, TranslationError):
            report.add_batch(batch, error=f"{type(outcome).__name__}: {outcome}")
            translations.extend([None] * len(batch))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            report.add_batch(batch)
            translations.extend(outcome)
    return translations


def version_callback(value: bool) -> None:
    if value:
        console.print(f"gtbatch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show extra info (batches, timing, request log).",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show errors and results.",
    ),
) -> None:
    """gtbatch: Translate batches of text with Google Translate."""
    global _verbose, _quiet
    _verbose = verbose
    _quiet = quiet
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command()
def translate(
    texts: list[str] | None = typer.Argument(
        None, help="Text segments to translate.",
    ),
    lang: str = typer.Option(
        "en", "--lang", "-l",
        help="Target language code (e.g. en, es, he).",
    ),
    source: str = typer.Option(
        AUTO, "--from", "-f",
        help="Source language code, or 'auto'.",
    ),
    backend_name: BackendChoice = typer.Option(
        BackendChoice.google_free, "--backend", "-b",
        help="Backend: google-free, google, dummy.",
    ),
    token: str | None = typer.Option(
        None, "--token", "-t",
        envvar="GTBATCH_TOKEN", help="Request token for the google backend.",
    ),
    input_file: Path | None = typer.Option(
        None, "--input", "-i",
        help="Read segments from a file, one per line.",
    ),
    proxy: str | None = typer.Option(
        None, "--proxy",
        envvar="GTBATCH_CORS_PROXY", help="CORS proxy prefix for every request URL.",
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print translations as a JSON array.",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-r",
        help="Save report to file (json/md/csv).",
    ),
    use_dummy: bool = typer.Option(
        False, "--dummy",
        help="Use dummy backend (shortcut for --backend dummy).",
    ),
) -> None:
    """Translate text segments, batching them to fit the request limit."""
    from gtbatch.reporting.formatters import save_report

    segments = _collect_texts(texts, input_file)
    for code in (lang, source):
        if code != AUTO and not DEFAULT_LANGUAGES.is_supported(code):
            console.print(f"[red]Error:[/red] Unsupported language: {code}")
            raise typer.Exit(1)

    backend, label = _create_backend(
        backend_name, token=token, proxy=proxy, use_dummy=use_dummy,
    )
    if source == AUTO and not backend.is_supported_auto_from():
        console.print(f"[red]Error:[/red] Backend {label} needs an explicit --from.")
        raise typer.Exit(1)

    batches = split_batches(backend, segments)
    rep = TranslationReport(
        backend=label,
        source_lang=source,
        target_lang=lang,
        input_file=str(input_file) if input_file else None,
    )
    _print(
        f"Translating {len(segments)} segment(s) in {len(batches)} batch(es) with {label}",
        verbose_only=True,
    )

    translations = asyncio.run(_translate_batches(backend, batches, lang, source, rep))
    rep.finish()

    if as_json:
        typer.echo(json.dumps(translations, ensure_ascii=False))
    else:
        table = Table(title=f"{source} → {lang}")
        table.add_column("#", justify="right")
        table.add_column("Source")
        table.add_column("Translation")
        for i, (original, translated) in enumerate(zip(segments, translations)):
            table.add_row(
                str(i), Text(original),
                Text(translated) if translated is not None else Text("failed", style="red"),
            )
        console.print(table)

    _print(f"Done in {rep.duration_seconds:.1f}s", verbose_only=True)

    if report is not None:
        save_report(rep, report)
        _print(f"Report saved to {report}")

    for err in rep.errors:
        console.print(f"[red]Error:[/red] {err}")
    if rep.batches_failed:
        raise typer.Exit(1)


@app.command()
def check(
    texts: list[str] = typer.Argument(..., help="Text segments to measure."),
    backend_name: BackendChoice = typer.Option(
        BackendChoice.google_free, "--backend", "-b",
        help="Backend whose request limit applies.",
    ),
) -> None:
    """Show how far a batch exceeds the backend's request length limit."""
    from gtbatch.backends.google import GoogleBackend, GoogleTokenFreeBackend

    if backend_name == BackendChoice.google:
        backend: TranslationBackend = GoogleBackend()
    elif backend_name == BackendChoice.google_free:
        backend = GoogleTokenFreeBackend()
    else:
        from gtbatch.backends.dummy import DummyBackend
        backend = DummyBackend()

    extra = backend.check_limit_exceeding(texts)
    batches = split_batches(backend, texts)
    asyncio.run(backend.aclose())

    if extra:
        console.print(
            f"[yellow]Over the limit by {extra} character(s)[/yellow];"
            f" would be sent as {len(batches)} batches."
        )
    else:
        console.print("[green]Within the limit[/green]; one request.")


@app.command()
def languages() -> None:
    """List supported language codes."""
    codes = DEFAULT_LANGUAGES.supported_languages()
    table = Table(title=f"Supported languages ({len(codes)})")
    table.add_column("Code")
    table.add_column("Sent as")
    for code in codes:
        table.add_row(code, DEFAULT_LANGUAGES.to_provider(code))
    console.print(table)
