"""
Storage utility.

File I/O helpers for raw sentiment and transcript documents.
"""

import json
import os
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

SENTIMENT_FILENAME = "sentiment.json"
TRANSCRIPTS_FILENAME = "transcripts.json"


class DocumentStore:
    """
    Manages raw documents on disk, one directory per ticker.

    Handles:
    - Sentiment documents (data/<ticker>/sentiment.json)
    - Transcript documents (data/<ticker>/transcripts.json)

    Only raw documents are stored; derived view models never are.
    """

    def __init__(self, data_root: str):
        """
        Initialize document store.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
        """
        self.data_root = str(data_root)
        logger.info(f"Initialized DocumentStore with data_root={self.data_root}")

    def _path(self, ticker: str, filename: str) -> str:
        return os.path.join(self.data_root, ticker.lower(), filename)

    def _load(self, filepath: str) -> Optional[Dict]:
        if not os.path.exists(filepath):
            logger.warning(f"No document found at {filepath}")
            return None

        with open(filepath, 'r', encoding='utf-8') as f:
            document = json.load(f)
        logger.debug(f"Loaded document from {filepath}")
        return document

    def _save(self, document: Dict, filepath: str) -> None:
        os.makedirs(os.path.dirname(filepath), exist_ok=True)
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved document to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save document to {filepath}: {e}")
            raise

    def load_sentiment(self, ticker: str) -> Optional[Dict]:
        """
        Load the raw sentiment document for a ticker.

        Returns:
            Parsed JSON (key order preserved), or None if the file doesn't exist

        Raises:
            json.JSONDecodeError: If the file is not valid JSON
        """
        return self._load(self._path(ticker, SENTIMENT_FILENAME))

    def load_transcripts(self, ticker: str) -> Optional[Dict]:
        """Load the raw transcript document for a ticker, or None."""
        return self._load(self._path(ticker, TRANSCRIPTS_FILENAME))

    def save_documents(self, ticker: str, sentiment: Dict, transcripts: Dict) -> None:
        """
        Save both raw documents for a ticker.

        Args:
            ticker: Entity identifier
            sentiment: Raw sentiment document
            transcripts: Raw transcript document
        """
        self._save(sentiment, self._path(ticker, SENTIMENT_FILENAME))
        self._save(transcripts, self._path(ticker, TRANSCRIPTS_FILENAME))
