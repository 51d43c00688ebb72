"""
Tone Classifier.

Maps a three-way sentiment distribution to a discrete tone.
"""

import logging
import math

from src.errors import InvalidSnapshotError
from src.models.sentiment import SentimentSnapshot
from src.models.view_model import ToneVerdict

logger = logging.getLogger(__name__)

POSITIVE = ToneVerdict("Positive")
NEGATIVE = ToneVerdict("Negative")
NEUTRAL = ToneVerdict("Neutral")


def classify(snapshot: SentimentSnapshot) -> ToneVerdict:
    """
    Classify a channel's sentiment distribution.

    Positive iff positive is strictly greater than both others, Negative iff
    negative is strictly greater than both others, Neutral otherwise. Any
    tie for the maximum is Neutral.

    Args:
        snapshot: Sentiment distribution for one channel

    Returns:
        ToneVerdict

    Raises:
        InvalidSnapshotError: If any value is NaN or infinite
    """
    positive = snapshot.positive_avg
    neutral = snapshot.neutral_avg
    negative = snapshot.negative_avg

    for name, value in (("positive", positive), ("neutral", neutral), ("negative", negative)):
        if not math.isfinite(value):
            raise InvalidSnapshotError(f"Non-finite {name} sentiment value: {value}")

    if positive > negative and positive > neutral:
        return POSITIVE
    if negative > positive and negative > neutral:
        return NEGATIVE
    return NEUTRAL
