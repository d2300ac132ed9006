"""
User repository functions.

Passwords are hashed here so plaintext never reaches the ORM layer.
"""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from booking.db import models, schemas
from booking.utils import token_crypto


def create_user(db: Session, user: schemas.UserCreate, *, commit: bool = True) -> models.User:
    db_user = models.User(
        username=user.username,
        password_hash=token_crypto.hash_password(user.password),
        role=user.role.value,
        company_id=user.company_id,
        vendor_id=user.vendor_id,
    )
    db.add(db_user)
    if commit:
        db.commit()
        db.refresh(db_user)
    else:
        db.flush()
    return db_user


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.username == username).first()


def update_password_hash(db: Session, user: models.User, password_hash: str) -> models.User:
    user.password_hash = password_hash
    db.commit()
    db.refresh(user)
    return user
