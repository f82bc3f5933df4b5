from fastapi import APIRouter, Depends

from tritrack.analytics.service import build_training_stats
from tritrack.api.dependencies.auth import get_current_user_id
from tritrack.api.dependencies.query import get_query_client
from tritrack.api.schemas import TrainingStatsResponse
from tritrack.db.query_client import QueryClient

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/stats", response_model=TrainingStatsResponse)
def stats(
    user_id: str = Depends(get_current_user_id),
    client: QueryClient = Depends(get_query_client),
):
    """Lifetime workout count, distance, duration and average workouts per week."""
    return TrainingStatsResponse.model_validate(build_training_stats(client, user_id))
