from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from .db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(320), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=True)
    image = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    streak = Column(Integer, default=0, nullable=False)
    last_completed_on = Column(Date, nullable=True)

    theme = Column(String(10), default="system", nullable=False)           # system | light | dark
    task_spacing = Column(String(12), default="default", nullable=False)   # default | compact | comfortable
    property_visibility = Column(JSON, default=dict, nullable=False)       # {property name: bool}

    tasks = relationship("Task", back_populates="user", cascade="all, delete-orphan")
    properties = relationship("Property", back_populates="user", cascade="all, delete-orphan")
    default_properties = relationship(
        "DefaultProperty", back_populates="user", cascade="all, delete-orphan",
        order_by="DefaultProperty.order",
    )


class Task(Base):
    __tablename__ = "tasks"
    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(200), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    completed = Column(Boolean, default=False, nullable=False, index=True)
    completed_at = Column(DateTime, nullable=True)
    properties = Column(JSON, default=list, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="tasks")


class Property(Base):
    __tablename__ = "properties"
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(50), nullable=False)
    type = Column(String(20), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="properties")


class DefaultProperty(Base):
    __tablename__ = "default_properties"
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(50), nullable=False)
    type = Column(String(20), nullable=False)
    options = Column(JSON, default=list, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", back_populates="default_properties")
