"""Lifetime training statistics."""

from __future__ import annotations

from loguru import logger

from tritrack.db.query_client import QueryClient
from tritrack.workouts.aggregation import TrainingStats, training_stats
from tritrack.workouts.repository import fetch_completed


def build_training_stats(client: QueryClient, user_id: str) -> TrainingStats:
    completed = fetch_completed(client, user_id)
    stats = training_stats(completed)
    logger.info(f"[ANALYTICS] Training stats for user_id={user_id}: {stats.total_workouts} workouts")
    return stats
