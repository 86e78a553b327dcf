"""
Session seam.

Identity comes from an external provider; this module only keeps the signed
session cookie and the user row. POST /auth/login plays the role of the
provider callback and can be switched off with TASKBOARD_DEV_LOGIN=0.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user
from ..models import Task, User
from ..schemas import LoginIn, UserOut
from ..streak import current_streak, utc_today

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

STARTER_TASKS = [
    ("review project requirements", 45),
    ("plan the week ahead", 30),
    ("go for a 15-minute walk", 15),
]


def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        name=user.name,
        image=user.image,
        streak=current_streak(user.streak or 0, user.last_completed_on, utc_today()),
    )


@router.post("/login", response_model=UserOut)
def login(body: LoginIn, request: Request, db: Session = Depends(get_db)):
    if not request.app.state.settings.dev_login:
        raise HTTPException(404, "Not Found")
    email = str(body.email).lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email, name=body.name, image=body.image, property_visibility={})
        db.add(user); db.flush()
        for title, duration in STARTER_TASKS:
            db.add(Task(title=title, duration=duration, user_id=user.id, properties=[]))
        db.commit(); db.refresh(user)
        logger.info("New user %s signed up with %d starter tasks", user.id, len(STARTER_TASKS))
    else:
        if body.name is not None: user.name = body.name
        if body.image is not None: user.image = body.image
        db.commit(); db.refresh(user)
    request.session["user_id"] = user.id
    return user_out(user)


@router.post("/logout", status_code=204)
def logout(request: Request):
    request.session.clear()
    return Response(status_code=204)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user_out(user)
