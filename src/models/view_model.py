"""
Derived view models.

Presentation-ready output of the analytics engine. Everything here is a
pure function of the source documents and is recomputed, never mutated.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from src.models.sentiment import QuarterSignals
from src.models.transcript import TranscriptRecord

TONE_CATEGORIES = ("Positive", "Negative", "Neutral")


@dataclass(frozen=True)
class ToneVerdict:
    """Discrete tone for one channel in one quarter."""
    category: str  # "Positive", "Negative" or "Neutral"

    def __post_init__(self):
        if self.category not in TONE_CATEGORIES:
            raise ValueError(
                f"Invalid category: {self.category}. Must be one of {TONE_CATEGORIES}"
            )

    @property
    def style(self) -> str:
        """Presentation hint ("positive", "negative", "neutral")."""
        return self.category.lower()


@dataclass(frozen=True)
class ChartPoint:
    """
    One quarter of the multi-series chart.
    All six values are rounded integer percentages.
    """
    quarter: str
    management_pos: int
    qa_pos: int
    management_neu: int
    qa_neu: int
    management_neg: int
    qa_neg: int

    def to_dict(self) -> dict:
        return {
            "quarter": self.quarter,
            "management_pos": self.management_pos,
            "qa_pos": self.qa_pos,
            "management_neu": self.management_neu,
            "qa_neu": self.qa_neu,
            "management_neg": self.management_neg,
            "qa_neg": self.qa_neg
        }


@dataclass(frozen=True)
class QoQPoint:
    """One quarter-over-quarter transition, labelled and formatted for display."""
    label: str  # Compact axis label (e.g. "2024Q4")
    full_label: str  # "2024Q3 → 2024Q4"
    management_delta: str  # Fixed precision, e.g. "0.012345"
    qa_delta: str

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "fullLabel": self.full_label,
            "managementDelta": self.management_delta,
            "qaDelta": self.qa_delta
        }


@dataclass(frozen=True)
class ViewModel:
    """
    Everything the Presentation Layer needs for one selected quarter.
    `chart_series` and `qoq_series` are shared across selections.
    """
    selected_quarter: str
    current_snapshot: QuarterSignals
    management_tone: ToneVerdict
    qa_tone: ToneVerdict
    chart_series: Tuple[ChartPoint, ...]
    qoq_series: Tuple[QoQPoint, ...]
    strategic_focuses: Tuple[str, ...]
    quarters: Tuple[str, ...] = ()
    current_percentages: Dict[str, int] = field(default_factory=dict)
    transcript: Optional[TranscriptRecord] = None
