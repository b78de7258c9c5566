"""Shared test configuration."""

import os

# Fake credentials keep boto3 and moto away from any real account.
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")  # noqa: S105
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("GAME_RESULTS_TABLE", "typing-game-results-test")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "typing-leaderboard")
