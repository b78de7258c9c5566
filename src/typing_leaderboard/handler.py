"""Lambda handler for the typing leaderboard service."""

from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.event_handler.exceptions import (
    BadRequestError,
    InternalServerError,
)
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from .config import get_settings
from .exceptions import InvalidMetricError, StorageUnavailableError
from .models import GameResultSubmission, SubmissionReceipt
from .service import GameResultService

settings = get_settings()
logger = Logger()
app = APIGatewayRestResolver()
service = GameResultService(logger=logger, settings=settings)


@app.get("/api/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return service.health_check()


@app.get("/api/game/text")
@app.get("/api/practice-texts")
def get_practice_text() -> dict[str, Any]:
    """Get a passage for a new typing game."""
    try:
        practice_text = service.get_practice_text()
    except Exception as e:
        logger.exception("Text generation failed")
        raise InternalServerError("Text generation is currently unavailable") from e

    return practice_text.model_dump(mode="json", by_alias=True)


@app.post("/api/scores")
def submit_score() -> dict[str, Any]:
    """Submit a game result. Results are attributed to the anonymous owner."""
    anonymous = settings.anonymous_owner_id
    try:
        if not app.current_event.body:
            raise BadRequestError("Request body is required")
        submission = GameResultSubmission.model_validate(app.current_event.json_body)
        logger.info(
            "Score submission received",
            extra={"net_wpm": submission.net_wpm, "accuracy": submission.accuracy},
        )

        result = service.submit(submission, anonymous, anonymous)
        logger.info("Score submitted successfully", extra={"game_id": result.id})

        receipt = SubmissionReceipt(game_id=result.id, timestamp=result.recorded_at)
        return receipt.model_dump(mode="json", by_alias=True)

    except InvalidMetricError as e:
        logger.warning(
            "Invalid score submission", extra={"field": e.field, "error": str(e)}
        )
        raise BadRequestError(f"Invalid {e.field}: {e}") from e
    except ValidationError as e:
        logger.warning("Invalid score submission", extra={"errors": e.errors()})
        raise BadRequestError(f"Invalid request: {e}") from e
    except ValueError as e:
        logger.warning("Malformed score submission", extra={"error": str(e)})
        raise BadRequestError("Invalid request: body must be JSON") from e
    except StorageUnavailableError as e:
        logger.error("Database error", extra={"error": str(e)})
        raise InternalServerError("Failed to submit score") from e


@app.get("/api/scores")
@app.get("/api/scores/leaderboard")
def get_leaderboard() -> list[dict[str, Any]]:
    """Get the top ranked game results."""
    top_param = app.current_event.get_query_string_value(
        "top", str(settings.default_top)
    )
    try:
        top = int(top_param) if top_param else settings.default_top
    except ValueError as ve:
        raise BadRequestError(
            f"Invalid top: must be an integer between 1 and {settings.max_top}"
        ) from ve

    try:
        logger.info("Leaderboard request", extra={"top": top})
        leaderboard = service.get_leaderboard(top)
        logger.info(
            "Leaderboard retrieved successfully",
            extra={"entries_count": len(leaderboard)},
        )
        return [entry.model_dump(mode="json", by_alias=True) for entry in leaderboard]

    except InvalidMetricError as e:
        logger.warning("Invalid leaderboard request", extra={"error": str(e)})
        raise BadRequestError(f"Invalid top: {e}") from e
    except StorageUnavailableError as e:
        logger.error("Database error", extra={"error": str(e)})
        raise InternalServerError("Failed to retrieve leaderboard") from e


@app.get("/api/scores/me/stats")
def get_user_stats() -> list[dict[str, Any]]:
    """Get every stored result for the caller's (anonymous) identity."""
    try:
        results = service.get_user_stats(settings.anonymous_owner_id)
        logger.info("User stats retrieved", extra={"count": len(results)})
        return [result.model_dump(mode="json", by_alias=True) for result in results]

    except InvalidMetricError as e:
        logger.warning("Invalid user stats request", extra={"error": str(e)})
        raise BadRequestError(str(e)) from e
    except StorageUnavailableError as e:
        logger.error("Database error", extra={"error": str(e)})
        raise InternalServerError("Failed to retrieve user stats") from e


@app.get("/api/scores/me/problem-keys")
def get_problem_keys() -> list[dict[str, Any]]:
    """Get the most missed keys for the caller's (anonymous) identity."""
    count_param = app.current_event.get_query_string_value("count", "10")
    try:
        count = int(count_param) if count_param else 10
    except ValueError as ve:
        raise BadRequestError(
            "Invalid count: must be an integer between 1 and 50"
        ) from ve

    try:
        problem_keys = service.get_problem_keys(settings.anonymous_owner_id, count)
        logger.info("Problem keys retrieved", extra={"count": len(problem_keys)})
        return [key.model_dump(mode="json", by_alias=True) for key in problem_keys]

    except InvalidMetricError as e:
        logger.warning("Invalid problem keys request", extra={"error": str(e)})
        raise BadRequestError(f"Invalid {e.field}: {e}") from e
    except StorageUnavailableError as e:
        logger.error("Database error", extra={"error": str(e)})
        raise InternalServerError("Failed to retrieve problem keys") from e


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Lambda handler entry point."""
    return app.resolve(event, context)
