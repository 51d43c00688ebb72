"""
Ingestion Service.

Fetches the sentiment and transcript documents for one entity and parses
them into immutable models. Supports the HTTP API and a local JSON store.
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

import httpx

import config.settings as settings
from src.errors import IngestionError
from src.models.sentiment import SentimentDataset
from src.models.transcript import TranscriptCollection
from src.utils.storage import DocumentStore

logger = logging.getLogger(__name__)

SENTIMENT = "sentiment"
TRANSCRIPTS = "transcripts"

_SOURCE_LABELS = {SENTIMENT: "Sentiment API", TRANSCRIPTS: "Transcript API"}


class IngestionService:
    """
    Retrieves both raw documents for a ticker.

    The two documents are independent, so remote fetches are issued
    concurrently and joined; if either fails the other is cancelled and a
    single IngestionError is raised. No partial result is ever returned.
    """

    def __init__(
        self,
        ticker: str = settings.TICKER,
        base_url: str = settings.API_BASE_URL,
        timeout_seconds: float = settings.REQUEST_TIMEOUT_SECONDS,
        use_local_data: bool = False,
        store: Optional[DocumentStore] = None,
        cache_documents: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize ingestion service.

        Args:
            ticker: Entity identifier (e.g., "nvda")
            base_url: API root serving /analysis/{ticker} and /getTranscripts/{ticker}
            timeout_seconds: Per-request timeout
            use_local_data: If True, read documents from `store` instead of HTTP
            store: Local document store (required for local mode and caching)
            cache_documents: If True, save fetched raw documents to `store`
            transport: Optional httpx transport (used by tests)
        """
        if (use_local_data or cache_documents) and store is None:
            raise ValueError("A DocumentStore is required for local data or caching")

        self.ticker = ticker
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.use_local_data = use_local_data
        self.store = store
        self.cache_documents = cache_documents
        self.transport = transport

        mode = "LOCAL" if use_local_data else "REMOTE"
        logger.info(f"Initialized IngestionService for {ticker} in {mode} mode")

    def _document_path(self, source: str) -> str:
        template = (
            settings.SENTIMENT_PATH_TEMPLATE if source == SENTIMENT
            else settings.TRANSCRIPT_PATH_TEMPLATE
        )
        return template.format(ticker=self.ticker)

    async def _fetch_document(self, client: httpx.AsyncClient, source: str) -> Dict:
        """
        GET one raw document.

        Raises:
            IngestionError: On non-2xx status, transport failure or invalid JSON
        """
        path = self._document_path(source)
        label = _SOURCE_LABELS[source]
        logger.debug(f"Fetching {source} document from {path}")

        try:
            response = await client.get(path)
        except httpx.TimeoutException as e:
            raise IngestionError(f"{label} timeout: {e}", source=source) from e
        except httpx.RequestError as e:
            raise IngestionError(f"{label} request error: {e}", source=source) from e

        if not response.is_success:
            raise IngestionError(
                f"{label} error: {response.status_code}",
                source=source,
                status_code=response.status_code
            )

        try:
            document = response.json()
        except ValueError as e:
            raise IngestionError(f"{label} returned invalid JSON: {e}", source=source) from e

        if not isinstance(document, dict):
            raise IngestionError(f"{label} returned {type(document).__name__}, expected object", source=source)
        return document

    async def fetch_raw(self) -> Tuple[Dict, Dict]:
        """
        Fetch both raw documents concurrently.

        Returns:
            (sentiment document, transcript document)

        Raises:
            IngestionError: If either fetch fails
        """
        if self.use_local_data:
            return self._load_local()

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self.transport
        ) as client:
            tasks = [
                asyncio.ensure_future(self._fetch_document(client, SENTIMENT)),
                asyncio.ensure_future(self._fetch_document(client, TRANSCRIPTS))
            ]
            try:
                sentiment, transcripts = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        if self.cache_documents:
            try:
                self.store.save_documents(self.ticker, sentiment, transcripts)
            except OSError as e:
                raise IngestionError(f"Failed to cache documents: {e}", source="cache") from e
        return sentiment, transcripts

    def _load_local(self) -> Tuple[Dict, Dict]:
        documents = []
        for source, loader in (
            (SENTIMENT, self.store.load_sentiment),
            (TRANSCRIPTS, self.store.load_transcripts)
        ):
            try:
                document = loader(self.ticker)
            except (OSError, ValueError) as e:
                raise IngestionError(f"Cannot read local {source} document: {e}", source=source) from e
            if document is None:
                raise IngestionError(
                    f"No local {source} document for {self.ticker}", source=source
                )
            if not isinstance(document, dict):
                raise IngestionError(
                    f"Local {source} document is {type(document).__name__}, expected object",
                    source=source
                )
            documents.append(document)
        return documents[0], documents[1]

    async def fetch_all(self) -> Tuple[SentimentDataset, TranscriptCollection]:
        """
        Fetch and parse both documents.

        Returns:
            (SentimentDataset, TranscriptCollection)

        Raises:
            IngestionError: If either document cannot be fetched or parsed
        """
        logger.info(f"Fetching documents for {self.ticker}")
        sentiment_doc, transcript_doc = await self.fetch_raw()

        dataset = SentimentDataset.from_dict(sentiment_doc)
        transcripts = TranscriptCollection.from_dict(transcript_doc)

        logger.info(
            f"Ingested {len(dataset)} quarters, {len(dataset.transitions)} transitions, "
            f"{len(transcripts)} transcripts for {self.ticker}"
        )
        return dataset, transcripts
