from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user
from ..layout import completed_row, grid_gap, task_card
from ..models import Task, User
from ..streak import current_streak, utc_today

router = APIRouter(prefix="/api", tags=["board"])


@router.get("/board")
def board(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Everything the dashboard paints, already laid out."""
    tasks = db.query(Task).filter(Task.user_id == user.id).order_by(Task.created_at.desc()).all()
    visibility = user.property_visibility or {}
    active = [task_card(t, visibility) for t in tasks if not t.completed]
    completed = [completed_row(t) for t in tasks if t.completed]
    return {
        "user": {"id": user.id, "name": user.name, "email": user.email, "image": user.image},
        "streak": current_streak(user.streak or 0, user.last_completed_on, utc_today()),
        "theme": user.theme,
        "task_spacing": user.task_spacing,
        "gap": grid_gap(user.task_spacing),
        "active": active,
        "completed": completed,
        "counts": {"active": len(active), "completed": len(completed)},
    }
