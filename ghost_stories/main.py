"""Main entry point for serving the ghost story API."""

import argparse
import logging
import sys

import uvicorn

from ghost_stories.config import get_openai_api_key, settings

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    """Main function for the API server CLI."""
    parser = argparse.ArgumentParser(description="Serve the AI ghost story generator")
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )
    parser.add_argument(
        "--require-key",
        action="store_true",
        help="Exit instead of starting when OPENAI_API_KEY is not configured",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.require_key and not get_openai_api_key():
        logger.error("OPENAI_API_KEY is not set. Export it or store it in Secret Manager")
        sys.exit(1)

    logger.info(f"Serving on http://{args.host}:{args.port}")
    uvicorn.run(
        "ghost_stories.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if args.verbose else settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
