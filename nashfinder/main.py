"""HTTP API.

Run with: nashfinder-api --port=PORT
"""
from __future__ import annotations

import argparse
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nashfinder import __version__
from nashfinder.config import CORS_ORIGINS, LOG_DATE_FORMAT, LOG_FORMAT, ApiConfig
from nashfinder.formats import supported_formats

# Configure logging
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title=ApiConfig.TITLE, version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers (imported after app initialization to avoid circular imports)
from nashfinder.routes.solve import router as solve_router  # noqa: E402

app.include_router(solve_router)


@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__, "formats": supported_formats()}


def run(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="nashfinder-api", description="Serve the Nash Finder HTTP API.")
    parser.add_argument("--host", default=ApiConfig.DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=ApiConfig.DEFAULT_PORT)
    args = parser.parse_args(argv)

    logger.info("Starting %s on %s:%d", ApiConfig.TITLE, args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    run()
