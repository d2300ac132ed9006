"""
Company repository functions.
"""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from booking.db import models, schemas


def create_company(db: Session, company: schemas.CompanyCreate, *, commit: bool = True) -> models.Company:
    db_company = models.Company(**company.model_dump())
    db.add(db_company)
    if commit:
        db.commit()
        db.refresh(db_company)
    else:
        db.flush()
    return db_company


def get_company(db: Session, company_id: uuid.UUID) -> Optional[models.Company]:
    return db.query(models.Company).filter(models.Company.id == company_id).first()
