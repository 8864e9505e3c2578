"""Translation report data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class BatchOutcome:
    """One request: how many segments it carried and how it ended."""

    index: int
    segments: int
    characters: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "batch": self.index,
            "segments": self.segments,
            "characters": self.characters,
            "status": "ok" if self.ok else "failed",
            "error": self.error or "",
        }


@dataclass
class TranslationReport:
    """Collects statistics about a translation run, batch by batch."""

    backend: str = ""
    source_lang: str = ""
    target_lang: str = ""
    input_file: str | None = None

    outcomes: list[BatchOutcome] = field(default_factory=list)

    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    def add_batch(self, texts: list[str], error: str | None = None) -> BatchOutcome:
        outcome = BatchOutcome(
            index=len(self.outcomes),
            segments=len(texts),
            characters=sum(len(t) for t in texts),
            error=error,
        )
        self.outcomes.append(outcome)
        return outcome

    @property
    def batches(self) -> int:
        return len(self.outcomes)

    @property
    def batches_failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def total_segments(self) -> int:
        return sum(o.segments for o in self.outcomes)

    @property
    def total_characters(self) -> int:
        return sum(o.characters for o in self.outcomes)

    @property
    def segments_translated(self) -> int:
        return sum(o.segments for o in self.outcomes if o.ok)

    @property
    def segments_failed(self) -> int:
        return self.total_segments - self.segments_translated

    @property
    def errors(self) -> list[str]:
        return [f"batch {o.index}: {o.error}" for o in self.outcomes if not o.ok]

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def finish(self) -> None:
        self.finished_at = datetime.now()

    def to_dict(self) -> dict:
        return {
            "backend": self.backend,
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "input_file": self.input_file,
            "total_segments": self.total_segments,
            "total_characters": self.total_characters,
            "batches": self.batches,
            "batches_failed": self.batches_failed,
            "segments_translated": self.segments_translated,
            "segments_failed": self.segments_failed,
            "duration_seconds": self.duration_seconds,
            "batch_details": [o.to_dict() for o in self.outcomes],
        }
