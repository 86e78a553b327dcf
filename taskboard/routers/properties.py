from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user
from ..models import Property, User
from ..schemas import PropertyCreate, PropertyOut

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=List[PropertyOut])
def list_properties(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.query(Property).filter(Property.user_id == user.id).order_by(Property.name.asc()).all()


@router.post("", response_model=PropertyOut, status_code=201)
def create_property(body: PropertyCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    prop = Property(name=body.name, type=body.type.value, user_id=user.id)
    db.add(prop); db.commit(); db.refresh(prop)
    return prop


@router.delete("/{property_id}", status_code=204)
def delete_property(property_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    prop = db.get(Property, property_id)
    if not prop or prop.user_id != user.id:
        raise HTTPException(404, "Property not found")
    db.delete(prop)
    db.commit()
    return Response(status_code=204)
