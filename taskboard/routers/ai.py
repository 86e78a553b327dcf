from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_ai_limiter, get_current_user, get_recommender
from ..layout import duration_choices
from ..models import User
from ..ratelimit import SlidingWindowLimiter
from ..recommender import DurationRecommender
from ..schemas import RecommendationOut, RecommendIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])

MIN_TITLE_LENGTH = 3


@router.post("/recommend", response_model=RecommendationOut)
def recommend(
    body: RecommendIn,
    user: User = Depends(get_current_user),
    recommender: DurationRecommender = Depends(get_recommender),
    limiter: SlidingWindowLimiter = Depends(get_ai_limiter),
):
    title = body.title
    if not isinstance(title, str) or len(title.strip()) < MIN_TITLE_LENGTH:
        raise HTTPException(400, "a valid title is required")

    retry_after = limiter.hit(user.id)
    if retry_after:
        logger.info("AI rate limit hit for user %s", user.id)
        raise HTTPException(429, "too many requests", headers={"Retry-After": str(math.ceil(retry_after))})

    rec = recommender.recommend(title.strip())
    return RecommendationOut(
        duration=rec.duration,
        confidence=rec.confidence,
        choices=duration_choices(rec.duration, rec.confidence),
    )
