from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .db import get_db
from .models import User
from .recommender import DurationRecommender
from .ratelimit import SlidingWindowLimiter


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    user_id = request.session.get("user_id")
    if not user_id:
        return None
    return db.get(User, user_id)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(401, "unauthorized")
    return user


def get_recommender(request: Request) -> DurationRecommender:
    return request.app.state.recommender


def get_ai_limiter(request: Request) -> SlidingWindowLimiter:
    return request.app.state.ai_limiter
