from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user
from ..models import DefaultProperty, Task, User
from ..properties import TaskPropertyList, instantiate_defaults, reset_changed_types
from ..schemas import TaskCreate, TaskListOut, TaskOut, TaskPatch
from ..sorting import sort_tasks
from ..streak import record_completion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# ---------- Helpers ----------
def get_owned_task(db: Session, user: User, task_id: str) -> Task:
    task = db.get(Task, task_id)
    if not task or task.user_id != user.id:
        raise HTTPException(404, "Task not found")
    return task


def validate_properties(raw: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    try:
        props = TaskPropertyList.validate_python(raw)
    except ValidationError as e:
        errors = []
        for err in e.errors(include_url=False):
            errors.append({
                "loc": ("body", "properties") + tuple(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            })
        raise RequestValidationError(errors)
    return [p.to_storage() for p in props]


def complete_task(task: Task, user: User) -> None:
    task.completed = True
    task.completed_at = datetime.utcnow()
    streak = record_completion(user)
    logger.info("User %s completed task %s; streak now %d", user.id, task.id, streak)


def reopen_task(task: Task) -> None:
    task.completed = False
    task.completed_at = None


# ---------- Routes ----------
@router.get("", response_model=TaskListOut)
def list_tasks(
    sort: Optional[str] = None,
    order: Literal["asc", "desc"] = "asc",
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    tasks = db.query(Task).filter(Task.user_id == user.id).order_by(Task.created_at.desc()).all()
    active = [t for t in tasks if not t.completed]
    completed = [t for t in tasks if t.completed]
    if sort:
        active = sort_tasks(active, sort, descending=order == "desc")
        completed = sort_tasks(completed, sort, descending=order == "desc")
    return TaskListOut(active=active, completed=completed)


@router.post("", response_model=TaskOut, status_code=201)
def create_task(body: TaskCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if body.properties is None:
        defaults = (
            db.query(DefaultProperty).filter(DefaultProperty.user_id == user.id)
            .order_by(DefaultProperty.order).all()
        )
        properties = instantiate_defaults(defaults)
    else:
        properties = [p.to_storage() for p in body.properties]
    task = Task(title=body.title, duration=body.duration, properties=properties, user_id=user.id)
    db.add(task); db.commit(); db.refresh(task)
    return task


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_owned_task(db, user, task_id)


@router.patch("/{task_id}", response_model=TaskOut)
def update_task(task_id: str, body: TaskPatch, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task = get_owned_task(db, user, task_id)
    if body.title is not None: task.title = body.title
    if body.duration is not None: task.duration = body.duration
    if body.properties is not None:
        task.properties = validate_properties(reset_changed_types(task.properties, body.properties))
    if body.completed is not None and body.completed != task.completed:
        if body.completed:
            complete_task(task, user)
        else:
            reopen_task(task)
    db.commit(); db.refresh(task)
    return task


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task = get_owned_task(db, user, task_id)
    db.delete(task)
    db.commit()
    return Response(status_code=204)
