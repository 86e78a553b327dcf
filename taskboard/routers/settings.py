from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user
from ..models import DefaultProperty, User
from ..schemas import AppearanceIn, DefaultPropertyIn, DefaultPropertyOut, SettingsOut
from ..streak import current_streak, utc_today

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _default_properties(db: Session, user: User) -> List[DefaultProperty]:
    return (
        db.query(DefaultProperty).filter(DefaultProperty.user_id == user.id)
        .order_by(DefaultProperty.order.asc()).all()
    )


@router.get("", response_model=SettingsOut)
def get_settings(user: User = Depends(get_current_user)):
    return SettingsOut(
        theme=user.theme,
        task_spacing=user.task_spacing,
        property_visibility=user.property_visibility or {},
        streak=current_streak(user.streak or 0, user.last_completed_on, utc_today()),
        last_completed_on=user.last_completed_on,
    )


@router.put("/visibility")
def update_visibility(body: Dict[str, bool], user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user.property_visibility = dict(body)
    db.commit(); db.refresh(user)
    return {"success": True, "property_visibility": user.property_visibility}


@router.put("/appearance")
def update_appearance(body: AppearanceIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if body.theme is not None: user.theme = body.theme
    if body.task_spacing is not None: user.task_spacing = body.task_spacing
    db.commit(); db.refresh(user)
    return {"success": True, "user": {"theme": user.theme, "task_spacing": user.task_spacing}}


@router.get("/default-properties", response_model=List[DefaultPropertyOut])
def list_default_properties(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _default_properties(db, user)


@router.put("/default-properties", response_model=List[DefaultPropertyOut])
def replace_default_properties(
    body: List[DefaultPropertyIn], user: User = Depends(get_current_user), db: Session = Depends(get_db),
):
    user_id = user.id
    try:
        db.query(DefaultProperty).filter(DefaultProperty.user_id == user_id).delete(synchronize_session=False)
        for index, prop in enumerate(body):
            db.add(DefaultProperty(
                name=prop.name,
                type=prop.type.value,
                options=prop.stored_options(),
                order=index,
                user_id=user_id,
            ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to replace default properties for user %s", user_id)
        raise HTTPException(500, "Internal Server Error")
    return _default_properties(db, user)
