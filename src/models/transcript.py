"""
Transcript data models.

Verbatim earnings-call transcripts, one record per quarter.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from src.errors import IngestionError


@dataclass(frozen=True)
class TranscriptEntry:
    """A single speaker turn."""
    speaker: str
    text: str

    @classmethod
    def from_dict(cls, data: dict) -> "TranscriptEntry":
        return cls(speaker=str(data["speaker"]), text=str(data["text"]))

    def to_dict(self) -> dict:
        return {"speaker": self.speaker, "text": self.text}


@dataclass(frozen=True)
class TranscriptRecord:
    """
    Transcript of one earnings call.
    Prepared remarks and Q&A are kept in spoken order.
    """
    date: str
    prepared_remarks: Tuple[TranscriptEntry, ...] = ()
    qanda: Tuple[TranscriptEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "TranscriptRecord":
        """Create TranscriptRecord from JSON (camelCase keys, as served)."""
        return cls(
            date=str(data["date"]),
            prepared_remarks=tuple(
                TranscriptEntry.from_dict(e) for e in data.get("preparedRemarks") or []
            ),
            qanda=tuple(TranscriptEntry.from_dict(e) for e in data.get("qanda") or [])
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "preparedRemarks": [e.to_dict() for e in self.prepared_remarks],
            "qanda": [e.to_dict() for e in self.qanda]
        }


@dataclass(frozen=True)
class TranscriptCollection:
    """All transcripts for one entity, in the document's declared order."""
    quarters: Tuple[str, ...] = ()
    records: Dict[str, TranscriptRecord] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "TranscriptCollection":
        """
        Create TranscriptCollection from the raw transcript document.

        Raises:
            IngestionError: If any record is malformed
        """
        try:
            quarters = tuple(data.keys())
            return cls(
                quarters=quarters,
                records={q: TranscriptRecord.from_dict(data[q]) for q in quarters}
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise IngestionError(
                f"Malformed transcript document: {e!r}", source="transcripts"
            ) from e

    def to_dict(self) -> dict:
        return {q: self.records[q].to_dict() for q in self.quarters}

    def get(self, quarter: str) -> Optional[TranscriptRecord]:
        return self.records.get(quarter)

    def __len__(self) -> int:
        return len(self.quarters)
