"""
Shared fixtures: small sentiment and transcript documents shaped like the
API responses.
"""

import pytest

from src.models.sentiment import SentimentDataset
from src.models.transcript import TranscriptCollection


def make_sentiment_document():
    return {
        "signals": {
            "2024Q3": {
                "management_sentiment": {"positive_avg": 0.82, "neutral_avg": 0.12, "negative_avg": 0.06},
                "qa_sentiment": {"positive_avg": 0.40, "neutral_avg": 0.45, "negative_avg": 0.15},
                "strategic_focuses": ["Data center growth", "Blackwell ramp"]
            },
            "2024Q4": {
                "management_sentiment": {"positive_avg": 0.455, "neutral_avg": 0.455, "negative_avg": 0.09},
                "qa_sentiment": {"positive_avg": 0.2, "neutral_avg": 0.3, "negative_avg": 0.5},
                "strategic_focuses": []
            },
            "2025Q1": {
                "management_sentiment": {"positive_avg": 0.6, "neutral_avg": 0.3, "negative_avg": 0.1},
                "qa_sentiment": {"positive_avg": 0.5, "neutral_avg": 0.4, "negative_avg": 0.1},
                "strategic_focuses": ["Sovereign AI"]
            }
        },
        "qoq_tone_change": {
            "2024Q3_to_2024Q4": {"management_tone_shift": -0.1234565, "qa_tone_shift": 0.05},
            "2024Q4_to_2025Q1": {"management_tone_shift": 0.1, "qa_tone_shift": -0.0000004}
        }
    }


def make_transcript_document():
    return {
        "2024Q3": {
            "date": "2024-11-20",
            "preparedRemarks": [
                {"speaker": "CFO", "text": "Revenue was a record."},
                {"speaker": "CEO", "text": "Demand remains strong."}
            ],
            "qanda": [
                {"speaker": "Analyst", "text": "How is supply?"},
                {"speaker": "CEO", "text": "Improving every quarter."}
            ]
        },
        "2024Q4": {
            "date": "2025-02-26",
            "preparedRemarks": [{"speaker": "CFO", "text": "Another record quarter."}],
            "qanda": []
        }
    }


@pytest.fixture
def sentiment_document():
    return make_sentiment_document()


@pytest.fixture
def transcript_document():
    return make_transcript_document()


@pytest.fixture
def dataset(sentiment_document):
    return SentimentDataset.from_dict(sentiment_document)


@pytest.fixture
def transcripts(transcript_document):
    return TranscriptCollection.from_dict(transcript_document)
