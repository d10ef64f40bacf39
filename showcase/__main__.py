from __future__ import annotations

import argparse

import uvicorn

from showcase.config import get_settings
from showcase.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Framework showcase backend")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    configure_logging(settings)
    print(f"Showcase backend running at http://{args.host}:{args.port}")
    print(f"Health check: http://{args.host}:{args.port}/api/health")
    uvicorn.run("showcase.main:app", host=args.host, port=args.port, reload=bool(args.reload), log_config=None)


if __name__ == "__main__":
    main()
