"""
Text report.

Renders a ViewModel as plain text, one section per dashboard tab.
"""

from typing import List, Sequence

import pandas as pd

import config.settings as settings
from src.engine.series_builder import series_frame
from src.models.transcript import TranscriptEntry
from src.models.view_model import ViewModel

SECTIONS = ("overview", "analysis", "transcript")

_CARD_TITLES = {
    "management": "Management",
    "qa": "Q&A"
}


def render_overview(view: ViewModel) -> str:
    """Tone verdicts, six percentage cards and strategic focuses."""
    lines = [
        f"Quarter: {view.selected_quarter}  (available: {', '.join(view.quarters)})",
        "",
        f"Management Tone: {view.management_tone.category}",
        f"Q&A Tone: {view.qa_tone.category}",
        ""
    ]
    for channel, title in _CARD_TITLES.items():
        cards = [
            f"{polarity.capitalize()} {view.current_percentages[f'{channel}_{suffix}']}%"
            for polarity, suffix in (("positive", "pos"), ("neutral", "neu"), ("negative", "neg"))
        ]
        lines.append(f"{title}: " + " | ".join(cards))

    lines.append("")
    lines.append("Strategic Focus Areas:")
    if view.strategic_focuses:
        lines.extend(f"  - {focus}" for focus in view.strategic_focuses)
    else:
        lines.append(f"  {settings.NO_FOCUSES_MESSAGE}")
    return "\n".join(lines)


def render_analysis(view: ViewModel) -> str:
    """Chart series and QoQ deltas as tables."""
    chart = series_frame(view.chart_series)
    qoq = pd.DataFrame(
        [p.to_dict() for p in view.qoq_series],
        columns=["label", "fullLabel", "managementDelta", "qaDelta"]
    )
    return "\n".join([
        "Sentiment Trends (%)",
        chart.to_string() if not chart.empty else "  (no quarters)",
        "",
        "Quarter-over-Quarter Tone Change",
        qoq.to_string(index=False) if not qoq.empty else "  (no transitions)"
    ])


def _render_entries(title: str, entries: Sequence[TranscriptEntry]) -> List[str]:
    lines = [title, "-" * len(title)]
    for entry in entries:
        lines.append(f"{entry.speaker}:")
        lines.append(f"  {entry.text}")
        lines.append("")
    return lines


def render_transcript(view: ViewModel) -> str:
    """Prepared remarks and Q&A for the selected quarter."""
    if view.transcript is None:
        return f"No transcript available for {view.selected_quarter}"

    lines = [f"Transcript {view.selected_quarter} ({view.transcript.date})", ""]
    lines.extend(_render_entries("Prepared Remarks", view.transcript.prepared_remarks))
    lines.extend(_render_entries("Q&A", view.transcript.qanda))
    return "\n".join(lines).rstrip()


def render(view: ViewModel, section: str = "overview") -> str:
    """Render one section, or all of them for section="all"."""
    renderers = {
        "overview": render_overview,
        "analysis": render_analysis,
        "transcript": render_transcript
    }
    if section == "all":
        return "\n\n".join(renderers[name](view) for name in SECTIONS)
    if section not in renderers:
        raise ValueError(f"Invalid section: {section}. Must be one of {SECTIONS + ('all',)}")
    return renderers[section](view)
