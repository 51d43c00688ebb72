"""
View Model Assembler.

Composes tone verdicts, chart series, QoQ series and the selected quarter's
snapshot into the single structure handed to the Presentation Layer.
"""

import logging
from typing import Optional, Tuple

from src.engine.delta_computer import build_deltas
from src.engine.series_builder import build_series, snapshot_percentages
from src.engine.tone_classifier import classify
from src.errors import MissingQuarterError
from src.models.sentiment import SentimentDataset
from src.models.transcript import TranscriptCollection
from src.models.view_model import ChartPoint, QoQPoint, ViewModel

logger = logging.getLogger(__name__)


class ViewModelAssembler:
    """
    Assembles view models for one session's documents.

    Chart and QoQ series depend only on the dataset, so they are built on
    first use and shared by every later selection. Selecting another
    quarter only re-runs validation, snapshot lookup and classification.
    """

    def __init__(
        self,
        dataset: SentimentDataset,
        transcripts: Optional[TranscriptCollection] = None
    ):
        """
        Initialize assembler.

        Args:
            dataset: Sentiment dataset (immutable for the session)
            transcripts: Transcript collection, if fetched
        """
        self.dataset = dataset
        self.transcripts = transcripts or TranscriptCollection()
        self._chart_series: Optional[Tuple[ChartPoint, ...]] = None
        self._qoq_series: Optional[Tuple[QoQPoint, ...]] = None

    @property
    def chart_series(self) -> Tuple[ChartPoint, ...]:
        if self._chart_series is None:
            self._chart_series = tuple(build_series(self.dataset))
        return self._chart_series

    @property
    def qoq_series(self) -> Tuple[QoQPoint, ...]:
        if self._qoq_series is None:
            self._qoq_series = tuple(build_deltas(
                self.dataset.ordered_shifts(),
                known_quarters=self.dataset.quarters
            ))
        return self._qoq_series

    def assemble(self, selected_quarter: str) -> ViewModel:
        """
        Build the view model for one quarter.

        Args:
            selected_quarter: Quarter identifier; must be a key of the dataset

        Returns:
            ViewModel

        Raises:
            MissingQuarterError: If the quarter is not in the dataset
            InvalidSnapshotError: If the quarter's sentiment values are non-finite
            MalformedTransitionKeyError: If a transition key cannot be parsed
        """
        if selected_quarter not in self.dataset:
            raise MissingQuarterError(selected_quarter)

        signals = self.dataset.signals[selected_quarter]
        management_tone = classify(signals.management)
        qa_tone = classify(signals.qa)

        transcript = self.transcripts.get(selected_quarter)
        if transcript is None:
            logger.warning(f"No transcript available for {selected_quarter}")

        view_model = ViewModel(
            selected_quarter=selected_quarter,
            current_snapshot=signals,
            management_tone=management_tone,
            qa_tone=qa_tone,
            chart_series=self.chart_series,
            qoq_series=self.qoq_series,
            strategic_focuses=signals.strategic_focuses,
            quarters=self.dataset.quarters,
            current_percentages=snapshot_percentages(signals),
            transcript=transcript
        )

        logger.info(
            f"Assembled view for {selected_quarter}: "
            f"management={management_tone.category}, qa={qa_tone.category}"
        )
        return view_model


def assemble(
    dataset: SentimentDataset,
    transcripts: Optional[TranscriptCollection],
    selected_quarter: str
) -> ViewModel:
    """One-shot assembly; use ViewModelAssembler to re-select quarters cheaply."""
    return ViewModelAssembler(dataset, transcripts).assemble(selected_quarter)
