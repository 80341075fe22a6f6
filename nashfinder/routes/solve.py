from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query, UploadFile
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from nashfinder.config import MAX_UPLOAD_SIZE_BYTES, ApiConfig, SolverConfig
from nashfinder.core.builder import ConstraintMode
from nashfinder.core.errors import (
    GameFormatError,
    InvariantViolation,
    ProbabilityBoundsError,
    SupportSetError,
)
from nashfinder.core.search import SearchOptions, find_equilibria
from nashfinder.dependencies import SolverFactory, SolverFactoryDep
from nashfinder.formats import parse_game
from nashfinder.formats.json_format import parse_document
from nashfinder.formats.supports import parse_support_sets
from nashfinder.models.game import StrategicGame
from nashfinder.routes.errors import bad_request, internal_error, invalid_format

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["solve"])


class SolveRequest(BaseModel):
    """Game document plus search parameters."""

    model_config = ConfigDict(extra="forbid")

    # Validated separately so that shape errors come back as 400, not 422
    game: dict[str, Any]
    supports: str | None = None
    mode: ConstraintMode = ConstraintMode.EQUILIBRIUM
    timeout_ms: int = Field(default=SolverConfig.TIMEOUT_MILLIS, gt=0)
    only_equilibria: bool = False


def _truncate_error_message(message: str) -> str:
    """Truncate error message to avoid leaking excessive internal details."""
    max_length = ApiConfig.MAX_ERROR_MESSAGE_LENGTH
    if len(message) <= max_length:
        return message
    return message[:max_length] + "..."


def _search(
    game: StrategicGame,
    supports: str | None,
    options: SearchOptions,
    solver_factory: SolverFactory,
    only_equilibria: bool,
) -> dict[str, Any]:
    try:
        explicit = parse_support_sets(supports, game.players) if supports else None
        result = find_equilibria(
            game, explicit=explicit, solver=solver_factory(options), options=options
        )
    except SupportSetError as e:
        raise bad_request(_truncate_error_message(str(e))) from e
    except (InvariantViolation, ProbabilityBoundsError) as e:
        logger.error("Equilibrium search failed: %s", e)
        raise internal_error(e) from e
    return result.to_dict(only_equilibria=only_equilibria)


@router.post("/solve")
def solve(request: SolveRequest, solver_factory: SolverFactoryDep) -> dict[str, Any]:
    """Find equilibria of a game given inline as a JSON document."""
    try:
        game = parse_document(request.game).to_game()
    except GameFormatError as e:
        raise invalid_format("request body", _truncate_error_message(str(e))) from e

    options = SearchOptions(mode=request.mode, timeout_ms=request.timeout_ms)
    logger.info("Solving inline game %s (mode=%s)", list(game.players), options.mode.value)
    return _search(game, request.supports, options, solver_factory, request.only_equilibria)


@router.post("/solve/upload")
async def solve_upload(
    file: UploadFile,
    solver_factory: SolverFactoryDep,
    supports: str | None = None,
    mode: ConstraintMode = ConstraintMode.EQUILIBRIUM,
    timeout_ms: Annotated[int, Query(gt=0)] = SolverConfig.TIMEOUT_MILLIS,
    only_equilibria: bool = False,
) -> dict[str, Any]:
    """Find equilibria of an uploaded game file."""
    if not file.filename:
        raise bad_request("No filename provided")

    # Check file size before reading entire content into memory
    if file.size is not None and file.size > MAX_UPLOAD_SIZE_BYTES:
        max_mb = MAX_UPLOAD_SIZE_BYTES / (1024 * 1024)
        raise bad_request(f"File too large. Maximum size is {max_mb:.1f}MB")

    logger.info("Solving uploaded game: %s", file.filename)
    content = await file.read()
    if len(content) > MAX_UPLOAD_SIZE_BYTES:
        max_mb = MAX_UPLOAD_SIZE_BYTES / (1024 * 1024)
        raise bad_request(f"File too large. Maximum size is {max_mb:.1f}MB")
    try:
        game = await run_in_threadpool(parse_game, content.decode("utf-8"), file.filename)
    except UnicodeDecodeError as e:
        raise invalid_format(file.filename, "not UTF-8 text") from e
    except GameFormatError as e:
        logger.error("Upload failed (invalid format): %s", e)
        raise invalid_format(file.filename, _truncate_error_message(str(e))) from e

    options = SearchOptions(mode=mode, timeout_ms=timeout_ms)
    # Solving is CPU-bound; keep it off the event loop
    return await run_in_threadpool(
        _search, game, supports, options, solver_factory, only_equilibria
    )
