"""Local launcher for the Skirmish HTTP API."""

import argparse

import uvicorn

from infra.logger import configure_logging, get_logger


def main():
    parser = argparse.ArgumentParser(description="Run the Skirmish backend.")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port for the API (default: 8000)")
    parser.add_argument(
        "--reload",
        dest="reload",
        action="store_true",
        default=False,
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Root log level (default: INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit one JSON object per log line")
    args = parser.parse_args()

    # Configure logging once at startup (console + file).
    configure_logging(level=args.log_level, json=args.json_logs)
    log = get_logger(__name__)

    url = f"http://{args.host}:{args.port}"
    log.info("Starting Skirmish backend at %s", url)
    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
