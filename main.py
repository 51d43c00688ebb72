"""
Earnings Pulse - Earnings Call Sentiment Dashboard

CLI entry point: fetch documents for one entity and print the report.
"""

import argparse
import logging
import sys

from src.errors import EarningsPulseError
from src.orchestrator import DashboardOrchestrator
from src.report import SECTIONS, render
from src.services.ingestion import IngestionService
from src.utils.storage import DocumentStore
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Earnings Pulse - Earnings Call Signal Extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Overview for the default quarter
  python main.py --ticker nvda

  # Full report for a specific quarter
  python main.py --ticker nvda --quarter 2024Q4 --section all

  # Read documents from data/<ticker>/ instead of the API
  python main.py --ticker nvda --local --section analysis
        """
    )

    parser.add_argument(
        "--ticker",
        default=settings.TICKER,
        help=f"Entity identifier (default: {settings.TICKER})"
    )

    parser.add_argument(
        "--quarter",
        default=None,
        help="Quarter to display (must exist). Defaults to EARNINGS_PULSE_QUARTER "
             "when present in the dataset, else the first quarter"
    )

    parser.add_argument(
        "--section",
        default="overview",
        choices=list(SECTIONS) + ["all"],
        help="Report section to print (default: overview)"
    )

    parser.add_argument(
        "--api-url",
        default=settings.API_BASE_URL,
        help=f"Analysis API base URL (default: {settings.API_BASE_URL})"
    )

    parser.add_argument(
        "--local",
        action="store_true",
        default=settings.USE_LOCAL_DATA,
        help="Read documents from the data directory instead of the API"
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    store = DocumentStore(args.data_root)
    ingestion = IngestionService(
        ticker=args.ticker,
        base_url=args.api_url,
        timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
        use_local_data=args.local,
        store=store,
        cache_documents=settings.CACHE_RAW_DOCUMENTS
    )
    orchestrator = DashboardOrchestrator(
        ingestion, preferred_quarter=settings.PREFERRED_QUARTER
    )

    print(f"Loading analysis for {args.ticker.upper()}...")

    try:
        view = orchestrator.load()
        if args.quarter is not None and args.quarter != view.selected_quarter:
            view = orchestrator.select(args.quarter)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1
    except EarningsPulseError as e:
        logger.error(f"Failed to build report for {args.ticker}: {e}", exc_info=True)
        print(f"Error: {settings.USER_ERROR_MESSAGE}")
        return 1

    print("=" * 60)
    print(f"Earnings Call Analysis - {args.ticker.upper()}")
    print("=" * 60)
    print(render(view, args.section))

    logger.info("Report complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
