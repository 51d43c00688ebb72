"""
Unit tests for the Dashboard Orchestrator.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from src.errors import IngestionError, MissingQuarterError
from src.models.sentiment import SentimentDataset
from src.orchestrator import DashboardOrchestrator, default_quarter


def mock_ingestion(dataset=None, transcripts=None, error=None):
    ingestion = Mock()
    if error is not None:
        ingestion.fetch_all = AsyncMock(side_effect=error)
    else:
        ingestion.fetch_all = AsyncMock(return_value=(dataset, transcripts))
    return ingestion


def test_default_quarter_is_first_declared(dataset):
    assert default_quarter(dataset) == "2024Q3"


def test_default_quarter_prefers_configured(dataset):
    assert default_quarter(dataset, preferred="2024Q4") == "2024Q4"
    assert default_quarter(dataset, preferred="1999Q1") == "2024Q3"


def test_default_quarter_empty_dataset():
    with pytest.raises(MissingQuarterError):
        default_quarter(SentimentDataset(quarters=(), signals={}))


def test_load(dataset, transcripts):
    ingestion = mock_ingestion(dataset, transcripts)
    orchestrator = DashboardOrchestrator(ingestion)

    view = orchestrator.load()

    assert view.selected_quarter == "2024Q3"
    assert orchestrator.view_model is view
    ingestion.fetch_all.assert_awaited_once()


def test_load_with_preferred_quarter(dataset, transcripts):
    orchestrator = DashboardOrchestrator(
        mock_ingestion(dataset, transcripts), preferred_quarter="2025Q1"
    )

    assert orchestrator.load().selected_quarter == "2025Q1"


def test_select_reuses_session(dataset, transcripts):
    ingestion = mock_ingestion(dataset, transcripts)
    orchestrator = DashboardOrchestrator(ingestion)
    initial = orchestrator.load()

    view = orchestrator.select("2024Q4")

    assert view.selected_quarter == "2024Q4"
    assert view.chart_series is initial.chart_series
    assert orchestrator.view_model is view
    ingestion.fetch_all.assert_awaited_once()


def test_select_missing_quarter_keeps_current_view(dataset, transcripts):
    orchestrator = DashboardOrchestrator(mock_ingestion(dataset, transcripts))
    initial = orchestrator.load()

    with pytest.raises(MissingQuarterError):
        orchestrator.select("2030Q1")

    assert orchestrator.view_model is initial


def test_select_before_load():
    orchestrator = DashboardOrchestrator(mock_ingestion())

    with pytest.raises(RuntimeError):
        orchestrator.select("2024Q3")


def test_ingestion_failure_short_circuits():
    orchestrator = DashboardOrchestrator(
        mock_ingestion(error=IngestionError("Sentiment API error: 500", source="sentiment", status_code=500))
    )

    with pytest.raises(IngestionError):
        orchestrator.load()

    assert orchestrator.view_model is None
    assert orchestrator.assembler is None
