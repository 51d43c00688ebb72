"""
Unit tests for the Ingestion Service.

HTTP is served by httpx.MockTransport; no network access.
"""

import asyncio
import os
import tempfile
from unittest.mock import patch

import httpx
import pytest

from src.errors import IngestionError
from src.services.ingestion import IngestionService
from src.utils.storage import DocumentStore


def make_service(handler, **kwargs):
    return IngestionService(
        ticker="nvda",
        base_url="http://testserver",
        transport=httpx.MockTransport(handler),
        **kwargs
    )


def routing_handler(sentiment_document, transcript_document, overrides=None):
    overrides = overrides or {}

    def handler(request):
        path = request.url.path
        if path in overrides:
            return overrides[path](request)
        if path == "/analysis/nvda":
            return httpx.Response(200, json=sentiment_document)
        if path == "/getTranscripts/nvda":
            return httpx.Response(200, json=transcript_document)
        return httpx.Response(404)

    return handler


def test_fetch_all(sentiment_document, transcript_document):
    service = make_service(routing_handler(sentiment_document, transcript_document))

    dataset, transcripts = asyncio.run(service.fetch_all())

    assert dataset.quarters == ("2024Q3", "2024Q4", "2025Q1")
    assert dataset.transitions == ("2024Q3_to_2024Q4", "2024Q4_to_2025Q1")
    assert transcripts.quarters == ("2024Q3", "2024Q4")


def test_requests_are_concurrent(sentiment_document, transcript_document):
    """Each response waits until both requests have arrived."""
    arrived = []

    async def handler(request):
        arrived.append(request.url.path)
        while len(arrived) < 2:
            await asyncio.sleep(0.01)
        if request.url.path == "/analysis/nvda":
            return httpx.Response(200, json=sentiment_document)
        return httpx.Response(200, json=transcript_document)

    async def run():
        service = make_service(handler)
        return await asyncio.wait_for(service.fetch_all(), timeout=2)

    dataset, transcripts = asyncio.run(run())

    assert sorted(arrived) == ["/analysis/nvda", "/getTranscripts/nvda"]
    assert len(dataset) == 3
    assert len(transcripts) == 2


def test_http_error_status(sentiment_document, transcript_document):
    handler = routing_handler(
        sentiment_document,
        transcript_document,
        overrides={"/analysis/nvda": lambda request: httpx.Response(500)}
    )
    service = make_service(handler)

    with pytest.raises(IngestionError) as exc_info:
        asyncio.run(service.fetch_all())

    assert exc_info.value.source == "sentiment"
    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == "Sentiment API error: 500"


def test_transcript_failure_fails_whole_fetch(sentiment_document, transcript_document):
    handler = routing_handler(
        sentiment_document,
        transcript_document,
        overrides={"/getTranscripts/nvda": lambda request: httpx.Response(503)}
    )
    service = make_service(handler)

    with pytest.raises(IngestionError) as exc_info:
        asyncio.run(service.fetch_all())

    assert exc_info.value.source == "transcripts"
    assert str(exc_info.value) == "Transcript API error: 503"


def test_transport_error(sentiment_document, transcript_document):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    handler = routing_handler(
        sentiment_document,
        transcript_document,
        overrides={"/analysis/nvda": refuse}
    )
    service = make_service(handler)

    with pytest.raises(IngestionError, match="request error"):
        asyncio.run(service.fetch_all())


def test_invalid_json(transcript_document):
    def handler(request):
        if request.url.path == "/analysis/nvda":
            return httpx.Response(200, text="<html>oops</html>")
        return httpx.Response(200, json=transcript_document)

    with pytest.raises(IngestionError, match="invalid JSON"):
        asyncio.run(make_service(handler).fetch_all())


def test_non_object_document(sentiment_document):
    def handler(request):
        if request.url.path == "/getTranscripts/nvda":
            return httpx.Response(200, json=[1, 2, 3])
        return httpx.Response(200, json=sentiment_document)

    with pytest.raises(IngestionError, match="expected object"):
        asyncio.run(make_service(handler).fetch_all())


def test_malformed_document_is_ingestion_error(transcript_document):
    handler = routing_handler({"signals": {"Q1": {}}}, transcript_document)

    with pytest.raises(IngestionError) as exc_info:
        asyncio.run(make_service(handler).fetch_all())

    assert exc_info.value.source == "sentiment"


def test_cache_documents(sentiment_document, transcript_document):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DocumentStore(tmpdir)
        service = make_service(
            routing_handler(sentiment_document, transcript_document),
            store=store,
            cache_documents=True
        )

        asyncio.run(service.fetch_all())

        assert store.load_sentiment("nvda") == sentiment_document
        assert store.load_transcripts("nvda") == transcript_document


def test_local_mode(sentiment_document, transcript_document):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DocumentStore(tmpdir)
        store.save_documents("nvda", sentiment_document, transcript_document)
        service = IngestionService(ticker="nvda", use_local_data=True, store=store)

        dataset, transcripts = asyncio.run(service.fetch_all())

        assert dataset.quarters == ("2024Q3", "2024Q4", "2025Q1")
        assert transcripts.get("2024Q3").date == "2024-11-20"


def test_local_mode_missing_document(sentiment_document):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DocumentStore(tmpdir)
        os.makedirs(os.path.join(tmpdir, "nvda"))
        store._save(sentiment_document, os.path.join(tmpdir, "nvda", "sentiment.json"))
        service = IngestionService(ticker="nvda", use_local_data=True, store=store)

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(service.fetch_all())

        assert exc_info.value.source == "transcripts"


def test_local_mode_requires_store():
    with pytest.raises(ValueError):
        IngestionService(ticker="nvda", use_local_data=True)


def test_local_mode_non_utf8_document(sentiment_document):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DocumentStore(tmpdir)
        store.save_documents("nvda", sentiment_document, {})
        with open(os.path.join(tmpdir, "nvda", "transcripts.json"), "wb") as f:
            f.write(b'{"2024Q3": "\xff\xfe"}')
        service = IngestionService(ticker="nvda", use_local_data=True, store=store)

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(service.fetch_all())

        assert exc_info.value.source == "transcripts"


def test_local_mode_non_object_document(transcript_document):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DocumentStore(tmpdir)
        store.save_documents("nvda", [], transcript_document)
        service = IngestionService(ticker="nvda", use_local_data=True, store=store)

        with pytest.raises(IngestionError, match="expected object"):
            asyncio.run(service.fetch_all())


def test_cache_failure_is_ingestion_error(sentiment_document, transcript_document):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DocumentStore(tmpdir)
        service = make_service(
            routing_handler(sentiment_document, transcript_document),
            store=store,
            cache_documents=True
        )

        with patch.object(store, "save_documents", side_effect=OSError("disk full")):
            with pytest.raises(IngestionError) as exc_info:
                asyncio.run(service.fetch_all())

        assert exc_info.value.source == "cache"
