"""
Vendor repository functions.
"""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from booking.db import models, schemas


def create_vendor(db: Session, vendor: schemas.VendorCreate, *, commit: bool = True) -> models.Vendor:
    db_vendor = models.Vendor(**vendor.model_dump())
    db.add(db_vendor)
    if commit:
        db.commit()
        db.refresh(db_vendor)
    else:
        db.flush()
    return db_vendor


def get_vendor(db: Session, vendor_id: uuid.UUID) -> Optional[models.Vendor]:
    return db.query(models.Vendor).filter(models.Vendor.id == vendor_id).first()
