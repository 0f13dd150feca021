"""
Pod Identity Probes
Main entry point: serve the probe endpoints or run a single probe once.
"""

import sys

import uvicorn
import structlog
from dotenv import load_dotenv

# Load environment variables
load_dotenv(".env.local")

from podprobes import __version__
from podprobes.config import get_settings, load_settings
from podprobes.domain.exceptions import ConfigurationError
from podprobes.infrastructure.logging import configure_logging
from podprobes.runner import EXIT_MISCONFIGURED, PROBES, run_check

logger = structlog.get_logger(__name__)


def run_api():
    """Run the probe API server."""
    settings = get_settings()

    logger.info(
        "starting_podprobes",
        version=__version__,
        environment=settings.app.env,
        host=settings.app.api_host,
        port=settings.app.api_port,
    )

    uvicorn.run(
        "podprobes.api.rest.app:create_app",
        factory=True,
        host=settings.app.api_host,
        port=settings.app.api_port,
        log_level=settings.app.log_level.lower(),
        access_log=False,
    )


def run_probe(probe_name: str, timeout: float = None) -> int:
    """Run one probe once and return its exit code."""
    return run_check(probe_name, timeout=timeout)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Pod Identity Probes - IMDS token and NMI liveness checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --mode api                     # Serve /api/v1/health/* endpoints
  python main.py --mode check --probe identity  # Exit 0 if a token can be obtained
  python main.py --mode check --probe nmi       # Exit 0 if the NMI answers
        """,
    )
    parser.add_argument(
        "--mode",
        choices=["api", "check"],
        default="api",
        help="Service mode to run (default: api)",
    )
    parser.add_argument(
        "--probe",
        choices=sorted(PROBES),
        default="identity",
        help="Probe to run in check mode (default: identity)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Probe timeout in seconds (default: PROBE_TIMEOUT_SECONDS)",
    )

    args = parser.parse_args()

    try:
        app_settings = load_settings().app
    except ConfigurationError as e:
        logger.error("probe_misconfigured", error=str(e))
        sys.exit(EXIT_MISCONFIGURED)

    configure_logging(level=app_settings.log_level, json_output=app_settings.log_json)

    if args.mode == "api":
        run_api()
    elif args.mode == "check":
        sys.exit(run_probe(args.probe, timeout=args.timeout))
