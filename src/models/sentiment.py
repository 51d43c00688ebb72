"""
Sentiment data models.

Represents the sentiment-signal document returned by the Ingestion Service:
per-quarter channel distributions and quarter-over-quarter tone shifts.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from src.errors import IngestionError

CHANNELS = ("management", "qa")
POLARITIES = ("positive", "neutral", "negative")


@dataclass(frozen=True)
class SentimentSnapshot:
    """
    Three-way sentiment distribution for one channel in one quarter.
    Values are expected in [0, 1] but are not required to sum to 1.
    """
    positive_avg: float
    neutral_avg: float
    negative_avg: float

    @classmethod
    def from_dict(cls, data: dict) -> "SentimentSnapshot":
        """Create SentimentSnapshot from a JSON dict."""
        return cls(
            positive_avg=float(data["positive_avg"]),
            neutral_avg=float(data["neutral_avg"]),
            negative_avg=float(data["negative_avg"])
        )

    def to_dict(self) -> dict:
        return {
            "positive_avg": self.positive_avg,
            "neutral_avg": self.neutral_avg,
            "negative_avg": self.negative_avg
        }

    def value(self, polarity: str) -> float:
        """Return the average for "positive", "neutral" or "negative"."""
        return getattr(self, f"{polarity}_avg")


@dataclass(frozen=True)
class QuarterSignals:
    """
    Management and Q&A snapshots for one quarter, plus the strategic
    focuses extracted upstream (passed through unmodified).
    """
    management: SentimentSnapshot
    qa: SentimentSnapshot
    strategic_focuses: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "QuarterSignals":
        """
        Create QuarterSignals from a `signals[<quarter>]` JSON dict.

        Raises:
            TypeError: If strategic_focuses is present but not a list
        """
        focuses = data.get("strategic_focuses")
        if focuses is None:
            focuses = []
        if not isinstance(focuses, list):
            raise TypeError(
                f"strategic_focuses must be a list, got {type(focuses).__name__}"
            )
        return cls(
            management=SentimentSnapshot.from_dict(data["management_sentiment"]),
            qa=SentimentSnapshot.from_dict(data["qa_sentiment"]),
            strategic_focuses=tuple(str(f) for f in focuses)
        )

    def to_dict(self) -> dict:
        return {
            "management_sentiment": self.management.to_dict(),
            "qa_sentiment": self.qa.to_dict(),
            "strategic_focuses": list(self.strategic_focuses)
        }

    def channel(self, name: str) -> SentimentSnapshot:
        """Return the snapshot for "management" or "qa"."""
        if name not in CHANNELS:
            raise ValueError(f"Invalid channel: {name}. Must be one of {CHANNELS}")
        return getattr(self, name)


@dataclass(frozen=True)
class ToneShift:
    """Signed quarter-over-quarter change for both channels."""
    management_tone_shift: float
    qa_tone_shift: float

    @classmethod
    def from_dict(cls, data: dict) -> "ToneShift":
        return cls(
            management_tone_shift=float(data["management_tone_shift"]),
            qa_tone_shift=float(data["qa_tone_shift"])
        )

    def to_dict(self) -> dict:
        return {
            "management_tone_shift": self.management_tone_shift,
            "qa_tone_shift": self.qa_tone_shift
        }


@dataclass(frozen=True)
class SentimentDataset:
    """
    Full sentiment document for one entity.

    `quarters` and `transitions` carry the declared order explicitly;
    `signals` and `qoq_tone_change` are lookups keyed by those identifiers.
    Immutable for the lifetime of one session.
    """
    quarters: Tuple[str, ...]
    signals: Dict[str, QuarterSignals]
    transitions: Tuple[str, ...] = ()
    qoq_tone_change: Dict[str, ToneShift] = field(default_factory=dict)

    def __post_init__(self):
        # Order lists and lookups must describe the same keys
        if len(set(self.quarters)) != len(self.quarters):
            raise ValueError("Duplicate quarter identifiers in dataset")
        if set(self.quarters) != set(self.signals):
            raise ValueError("Quarter order does not match signal keys")
        if len(set(self.transitions)) != len(self.transitions):
            raise ValueError("Duplicate transition keys in dataset")
        if set(self.transitions) != set(self.qoq_tone_change):
            raise ValueError("Transition order does not match tone change keys")

    @classmethod
    def from_dict(cls, data: dict) -> "SentimentDataset":
        """
        Create SentimentDataset from the raw sentiment document.

        The enumeration order of `signals` and `qoq_tone_change` in the
        document is captured here as the dataset's declared order.

        Raises:
            IngestionError: If the document is missing fields or has the wrong shape
        """
        try:
            raw_signals = data["signals"]
            raw_qoq = data.get("qoq_tone_change") or {}
            quarters = tuple(raw_signals.keys())
            transitions = tuple(raw_qoq.keys())
            return cls(
                quarters=quarters,
                signals={q: QuarterSignals.from_dict(raw_signals[q]) for q in quarters},
                transitions=transitions,
                qoq_tone_change={t: ToneShift.from_dict(raw_qoq[t]) for t in transitions}
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise IngestionError(
                f"Malformed sentiment document: {e!r}", source="sentiment"
            ) from e

    def to_dict(self) -> dict:
        """Convert back to the raw document shape, preserving declared order."""
        return {
            "signals": {q: self.signals[q].to_dict() for q in self.quarters},
            "qoq_tone_change": {
                t: self.qoq_tone_change[t].to_dict() for t in self.transitions
            }
        }

    def __contains__(self, quarter: object) -> bool:
        return quarter in self.signals

    def __len__(self) -> int:
        return len(self.quarters)

    def ordered_signals(self) -> List[Tuple[str, QuarterSignals]]:
        """(quarter, signals) pairs in declared order."""
        return [(q, self.signals[q]) for q in self.quarters]

    def ordered_shifts(self) -> List[Tuple[str, ToneShift]]:
        """(transition key, shift) pairs in declared order."""
        return [(t, self.qoq_tone_change[t]) for t in self.transitions]
