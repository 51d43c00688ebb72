"""
Delta Computer.

Turns quarter-over-quarter tone shifts into labelled, fixed-precision
display points.
"""

import logging
from collections import Counter
from typing import Iterable, List, Tuple

import config.settings as settings
from src.errors import InvalidSnapshotError, MalformedTransitionKeyError
from src.models.sentiment import ToneShift
from src.models.view_model import QoQPoint
from src.utils.rounding import format_fixed

logger = logging.getLogger(__name__)


def parse_transition_key(
    key: str,
    separator: str = settings.TRANSITION_SEPARATOR
) -> Tuple[str, str]:
    """
    Split a transition key into (from_quarter, to_quarter).

    The key must contain the separator exactly once (overlapping
    occurrences count) with a non-empty identifier on each side.

    Raises:
        MalformedTransitionKeyError: If the key cannot be split unambiguously
    """
    index = key.find(separator)
    if index == -1 or key.find(separator, index + 1) != -1:
        raise MalformedTransitionKeyError(key, separator)

    from_quarter = key[:index]
    to_quarter = key[index + len(separator):]
    if not from_quarter or not to_quarter:
        raise MalformedTransitionKeyError(key, separator)
    return from_quarter, to_quarter


def format_delta(value: float, places: int = settings.DELTA_DECIMAL_PLACES) -> str:
    """Format a tone shift to a fixed number of decimals, round-half-up."""
    try:
        return format_fixed(value, places)
    except ValueError as e:
        raise InvalidSnapshotError(f"Non-finite tone shift: {value}") from e


def build_deltas(
    shifts: Iterable[Tuple[str, ToneShift]],
    known_quarters: Iterable[str] = (),
    separator: str = settings.TRANSITION_SEPARATOR,
    arrow: str = settings.LABEL_ARROW,
    places: int = settings.DELTA_DECIMAL_PLACES
) -> List[QoQPoint]:
    """
    Build one QoQPoint per transition, in the given order.

    The compact label drops the origin quarter when it is already implied by
    the chart axis: the origin is one of `known_quarters` or appeared in an
    earlier transition. Compact labels that would collide fall back to the
    full label.

    Args:
        shifts: (transition key, ToneShift) pairs in declared order
        known_quarters: Quarter identifiers already on the chart axis
        separator: Token joining the two quarters in a transition key
        arrow: Joiner used for the full label
        places: Digits after the decimal point for deltas

    Returns:
        QoQPoints in the same order as `shifts`

    Raises:
        MalformedTransitionKeyError: If any key lacks exactly one separator
        InvalidSnapshotError: If any shift is NaN or infinite
    """
    seen = set(known_quarters)
    rows = []

    for key, shift in shifts:
        from_quarter, to_quarter = parse_transition_key(key, separator)
        full_label = f"{from_quarter}{arrow}{to_quarter}"
        label = to_quarter if from_quarter in seen else full_label
        seen.update((from_quarter, to_quarter))

        rows.append((
            label,
            full_label,
            format_delta(shift.management_tone_shift, places),
            format_delta(shift.qa_tone_shift, places)
        ))

    label_counts = Counter(label for label, *_ in rows)
    points = []
    for label, full_label, management_delta, qa_delta in rows:
        if label != full_label and label_counts[label] > 1:
            logger.debug(f"Compact label {label!r} is ambiguous, using {full_label!r}")
            label = full_label
        points.append(QoQPoint(
            label=label,
            full_label=full_label,
            management_delta=management_delta,
            qa_delta=qa_delta
        ))

    logger.debug(f"Built QoQ series with {len(points)} points")
    return points
