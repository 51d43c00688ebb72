"""
Series Builder.

Projects the per-quarter sentiment dataset into ordered percentage series
for multi-line and multi-bar charts.
"""

import logging
from typing import Dict, List, Sequence

import pandas as pd

from src.errors import InvalidSnapshotError
from src.models.sentiment import CHANNELS, QuarterSignals, SentimentDataset
from src.models.view_model import ChartPoint
from src.utils.rounding import to_percentage

logger = logging.getLogger(__name__)

# ChartPoint field suffix per polarity
_SUFFIXES = {"positive": "pos", "neutral": "neu", "negative": "neg"}


def snapshot_percentages(signals: QuarterSignals) -> Dict[str, int]:
    """
    Round one quarter's six channel x polarity values to percentages.

    Returns:
        Dict keyed like ChartPoint fields ("management_pos", "qa_neg", ...)

    Raises:
        InvalidSnapshotError: If any value is NaN or infinite
    """
    percentages = {}
    for channel in CHANNELS:
        snapshot = signals.channel(channel)
        for polarity, suffix in _SUFFIXES.items():
            try:
                percentages[f"{channel}_{suffix}"] = to_percentage(snapshot.value(polarity))
            except ValueError as e:
                raise InvalidSnapshotError(f"{channel} {polarity}: {e}") from e
    return percentages


def build_series(dataset: SentimentDataset) -> List[ChartPoint]:
    """
    Build one ChartPoint per quarter in the dataset's declared order.

    Values outside [0, 1] are not clamped; the rounded out-of-range
    percentage is propagated.

    Args:
        dataset: Sentiment dataset

    Returns:
        ChartPoints ordered exactly as `dataset.quarters`
    """
    points = [
        ChartPoint(quarter=quarter, **snapshot_percentages(signals))
        for quarter, signals in dataset.ordered_signals()
    ]
    logger.debug(f"Built chart series with {len(points)} points")
    return points


def series_frame(points: Sequence[ChartPoint]) -> pd.DataFrame:
    """Tabular view of a chart series, indexed by quarter in series order."""
    columns = ["management_pos", "qa_pos", "management_neu", "qa_neu", "management_neg", "qa_neg"]
    if not points:
        return pd.DataFrame(columns=columns, index=pd.Index([], name="quarter"))
    df = pd.DataFrame([p.to_dict() for p in points])
    return df.set_index("quarter")[columns]
