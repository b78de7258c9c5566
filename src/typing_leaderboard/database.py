"""DynamoDB operations for typing game results."""

import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal, DecimalException
from typing import Any, Protocol
from uuid import uuid4

import boto3
from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings, get_settings
from .exceptions import StorageUnavailableError
from .models import GameResult, GameResultSubmission

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MAX_MICROSECONDS = (datetime.max.replace(tzinfo=UTC) - EPOCH) // timedelta(
    microseconds=1
)


class ResultStore(Protocol):
    """Partitioned, append-only storage for game results."""

    def append(self, result: GameResultSubmission) -> GameResult: ...

    def query_by_owner(self, owner_id: str) -> list[GameResult]: ...

    def query_top(self, count: int) -> list[GameResult]: ...


def reverse_timestamp_key(recorded_at: datetime) -> str:
    """Build a row key that sorts newest first within a partition."""
    elapsed = (recorded_at - EPOCH) // timedelta(microseconds=1)
    return f"{MAX_MICROSECONDS - elapsed:020d}-{uuid4().hex[:8]}"


class GameResultDatabase:
    """DynamoDB operations for game result data.

    Items are partitioned by ``owner_id`` and keyed within the partition by a
    reverse timestamp ``row_key``, which doubles as the game id.
    """

    def __init__(
        self,
        table_name: str | None = None,
        settings: Settings | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Initialize database connection."""
        self.settings = settings or get_settings()
        resolved_table_name = table_name or self.settings.table_name
        if not resolved_table_name:
            raise ValueError("Table name must be provided")
        self.table_name = resolved_table_name
        self.logger = logger or Logger(child=True)
        client_config = Config(
            connect_timeout=self.settings.store_connect_timeout,
            read_timeout=self.settings.store_read_timeout,
            retries={
                "max_attempts": self.settings.store_max_attempts,
                "mode": "standard",
            },
        )
        self.dynamodb = boto3.resource(
            "dynamodb", region_name=self.settings.region, config=client_config
        )
        self.table = self.dynamodb.Table(self.table_name)

    def append(self, result: GameResultSubmission) -> GameResult:
        """Store a validated, scored result and return the persisted record.

        The store assigns ``id`` and ``recorded_at``. The put is conditional
        on the key being new, so an existing record is never replaced.
        """
        recorded_at = datetime.now(UTC)
        record = GameResult(
            id=reverse_timestamp_key(recorded_at),
            owner_id=result.owner_id,
            display_name=result.display_name,
            net_wpm=result.net_wpm,
            gross_wpm=result.gross_wpm,
            accuracy=result.accuracy,
            composite_score=result.composite_score or 0.0,
            problem_keys=result.problem_keys,
            recorded_at=recorded_at,
        )

        item: dict[str, Any] = {
            "owner_id": record.owner_id,
            "row_key": record.id,
            "display_name": record.display_name,
            "net_wpm": Decimal(str(record.net_wpm)),
            "gross_wpm": Decimal(str(record.gross_wpm)),
            "accuracy": Decimal(str(record.accuracy)),
            "composite_score": Decimal(str(record.composite_score)),
            "problem_keys_json": json.dumps(record.problem_keys),
            "recorded_at": record.recorded_at.isoformat(),
        }

        try:
            self.table.put_item(
                Item=item, ConditionExpression=Attr("row_key").not_exists()
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(f"Failed to append game result: {e}") from e
        except (TypeError, DecimalException) as e:
            # Item values DynamoDB cannot represent, e.g. infinities.
            raise StorageUnavailableError(
                f"Failed to serialize game result: {e}"
            ) from e

        self.logger.info(
            "Game result stored",
            extra={
                "owner_id": record.owner_id,
                "game_id": record.id,
                "composite_score": record.composite_score,
            },
        )
        return record

    def query_by_owner(self, owner_id: str) -> list[GameResult]:
        """Get every result stored under an owner, newest first."""
        try:
            items = self._collect(
                self.table.query, KeyConditionExpression=Key("owner_id").eq(owner_id)
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(f"Failed to query game results: {e}") from e

        results = [self._to_result(item) for item in items]
        self.logger.info(
            "Retrieved game results for owner",
            extra={"owner_id": owner_id, "count": len(results)},
        )
        return results

    def query_top(self, count: int) -> list[GameResult]:
        """Get the ``count`` best results across all owners by composite score."""
        try:
            items = self._collect(self.table.scan)
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(f"Failed to get top results: {e}") from e

        # Stable sort: equal scores keep storage order.
        results = sorted(
            (self._to_result(item) for item in items),
            key=lambda r: r.composite_score,
            reverse=True,
        )[:count]
        self.logger.info("Retrieved top game results", extra={"count": len(results)})
        return results

    @staticmethod
    def _collect(operation: Any, **kwargs: Any) -> list[dict[str, Any]]:
        """Run a query or scan, following pagination to the end."""
        items: list[dict[str, Any]] = []
        while True:
            response = operation(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    @staticmethod
    def _to_result(item: dict[str, Any]) -> GameResult:
        try:
            problem_keys = json.loads(str(item.get("problem_keys_json") or "{}"))
        except json.JSONDecodeError:
            problem_keys = {}
        if not isinstance(problem_keys, dict):
            problem_keys = {}

        return GameResult(
            id=str(item["row_key"]),
            owner_id=str(item["owner_id"]),
            display_name=str(item.get("display_name", "Unknown")),
            net_wpm=float(item.get("net_wpm", 0)),
            gross_wpm=float(item.get("gross_wpm", 0)),
            accuracy=float(item.get("accuracy", 0)),
            composite_score=float(item.get("composite_score", 0)),
            problem_keys=problem_keys,
            recorded_at=datetime.fromisoformat(str(item["recorded_at"])),
        )
