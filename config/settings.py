"""
Configuration settings for Earnings Pulse.

Centralized configuration for ingestion, the analytics engine and the CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("EARNINGS_PULSE_DATA_ROOT", PROJECT_ROOT / "data"))

# Entity being analysed (ingestion input only, the engine is entity-agnostic)
TICKER = os.getenv("EARNINGS_PULSE_TICKER", "nvda")

# Ingestion Service
API_BASE_URL = os.getenv("EARNINGS_PULSE_API_URL", "http://localhost:8000")
SENTIMENT_PATH_TEMPLATE = "/analysis/{ticker}"
TRANSCRIPT_PATH_TEMPLATE = "/getTranscripts/{ticker}"
REQUEST_TIMEOUT_SECONDS = float(os.getenv("EARNINGS_PULSE_TIMEOUT", "30"))
USE_LOCAL_DATA = os.getenv("EARNINGS_PULSE_LOCAL", "0") == "1"  # Read JSON from DATA_ROOT
CACHE_RAW_DOCUMENTS = False  # Save fetched raw documents under DATA_ROOT

# Engine
TRANSITION_SEPARATOR = "_to_"  # "2024Q3_to_2024Q4"
LABEL_ARROW = " → "
DELTA_DECIMAL_PLACES = 6

# Presentation defaults
PREFERRED_QUARTER = os.getenv("EARNINGS_PULSE_QUARTER") or None  # Falls back to first quarter
USER_ERROR_MESSAGE = "We are facing an issue right now. Try again later."
NO_FOCUSES_MESSAGE = "No strategic focuses reported for this quarter"

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "earnings_pulse.log"
