"""Output formatters for translation reports."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Callable
from pathlib import Path

from gtbatch.reporting.report import TranslationReport

_BATCH_COLUMNS = ["batch", "segments", "characters", "status", "error"]


def to_json(report: TranslationReport, indent: int = 2) -> str:
    """Format report as JSON, with one entry per batch under ``batch_details``."""
    return json.dumps(report.to_dict(), indent=indent, default=str, ensure_ascii=False)


def to_markdown(report: TranslationReport) -> str:
    """Format report as Markdown: run summary, then a table of batches."""
    lines = [
        "# Translation Report",
        "",
        "| Field | Value |",
        "|-------|-------|",
        f"| Backend | {report.backend} |",
        f"| Languages | {report.source_lang} → {report.target_lang} |",
    ]
    if report.input_file:
        lines.append(f"| Input | `{report.input_file}` |")

    lines.extend([
        "",
        "## Statistics",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Segments | {report.total_segments} |",
        f"| Characters | {report.total_characters} |",
        f"| Translated | {report.segments_translated} |",
        f"| Failed | {report.segments_failed} |",
        f"| Duration | {report.duration_seconds:.1f}s |",
    ])

    if report.outcomes:
        lines.extend([
            "",
            f"## Batches ({report.batches}, {report.batches_failed} failed)",
            "",
            "| # | Segments | Characters | Status | Error |",
            "|---|----------|------------|--------|-------|",
        ])
        for outcome in report.outcomes:
            row = outcome.to_dict()
            lines.append(
                f"| {row['batch']} | {row['segments']} | {row['characters']}"
                f" | {row['status']} | {row['error']} |"
            )

    return "\n".join(lines) + "\n"


def to_csv(report: TranslationReport) -> str:
    """Format report as CSV, one row per batch."""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=_BATCH_COLUMNS)
    writer.writeheader()
    writer.writerows(outcome.to_dict() for outcome in report.outcomes)
    return output.getvalue()


_FORMATTERS: dict[str, Callable[[TranslationReport], str]] = {
    ".json": to_json,
    ".md": to_markdown,
    ".markdown": to_markdown,
    ".csv": to_csv,
}


def save_report(report: TranslationReport, path: str | Path) -> None:
    """Save report to file, picking the format from the extension (JSON by default)."""
    path = Path(path)
    formatter = _FORMATTERS.get(path.suffix.lower(), to_json)
    path.write_text(formatter(report), encoding="utf-8")
