"""
Dashboard Orchestrator.

Coordinates one session: fetch both documents, assemble the initial view
and re-assemble on quarter selection.
"""

import asyncio
import logging
from typing import Optional

from src.engine.assembler import ViewModelAssembler
from src.errors import MissingQuarterError
from src.models.sentiment import SentimentDataset
from src.models.view_model import ViewModel
from src.services.ingestion import IngestionService

logger = logging.getLogger(__name__)


def default_quarter(dataset: SentimentDataset, preferred: Optional[str] = None) -> str:
    """
    Pick the initial quarter for a session.

    Returns `preferred` when the dataset has it, otherwise the first quarter
    in declared order.

    Raises:
        MissingQuarterError: If the dataset has no quarters at all
    """
    if preferred is not None and preferred in dataset:
        return preferred
    if preferred is not None:
        logger.warning(f"Preferred quarter {preferred} not in dataset, using first quarter")
    if not dataset.quarters:
        raise MissingQuarterError(preferred or "")
    return dataset.quarters[0]


class DashboardOrchestrator:
    """
    Orchestrates one session of the dashboard.

    Coordinates:
    1. Concurrent ingestion of both documents
    2. Initial assembly for the default quarter
    3. Re-assembly on quarter selection (series reused)
    """

    def __init__(self, ingestion: IngestionService, preferred_quarter: Optional[str] = None):
        """
        Initialize orchestrator.

        Args:
            ingestion: Configured ingestion service
            preferred_quarter: Initial quarter, if present in the dataset
        """
        self.ingestion = ingestion
        self.preferred_quarter = preferred_quarter
        self.assembler: Optional[ViewModelAssembler] = None
        self.view_model: Optional[ViewModel] = None

    async def load_async(self) -> ViewModel:
        """
        Fetch documents and assemble the initial view model.

        Raises:
            IngestionError: If either document fails; nothing is assembled
            EngineError: If the documents violate an engine precondition
        """
        dataset, transcripts = await self.ingestion.fetch_all()

        assembler = ViewModelAssembler(dataset, transcripts)
        quarter = default_quarter(dataset, self.preferred_quarter)
        view_model = assembler.assemble(quarter)

        # Only replace session state once everything succeeded
        self.assembler = assembler
        self.view_model = view_model
        return view_model

    def load(self) -> ViewModel:
        """Synchronous wrapper around load_async()."""
        return asyncio.run(self.load_async())

    def select(self, quarter: str) -> ViewModel:
        """
        Re-assemble the view for another quarter.

        Raises:
            RuntimeError: If called before load()
            MissingQuarterError: If the quarter is not in the dataset
        """
        if self.assembler is None:
            raise RuntimeError("No session loaded; call load() first")

        self.view_model = self.assembler.assemble(quarter)
        return self.view_model
