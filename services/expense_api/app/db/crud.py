# app/db/crud.py

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import StorageFailure
from services.aggregation import matches_deletion
from .models import Expense

logger = logging.getLogger(__name__)


def create_expenses(db: Session, user_id: int, items: Iterable, now: Optional[datetime] = None) -> List[Expense]:
    """
    Insert one Expense per item in a single transaction.
    Every row of the batch shares the same created_at.
    """
    created_at = now or datetime.now()
    rows = [
        Expense(
            user_id=user_id,
            tenant=item.tenant,
            amount=item.amount,
            created_at=created_at,
        )
        for item in items
    ]

    try:
        db.add_all(rows)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("create_expenses failed for user_id=%s: %s", user_id, e)
        raise StorageFailure("Failed to create expenses") from e

    for row in rows:
        db.refresh(row)

    logger.info("created %d expenses for user_id=%s", len(rows), user_id)
    return rows


def _active_query(db: Session, user_id: int):
    return (
        db.query(Expense)
        .filter(Expense.user_id == user_id)
        .filter(Expense.deleted_at.is_(None))
    )


def list_expenses(db: Session, user_id: int) -> List[Expense]:
    """Every expense of one owner, soft-deleted rows included."""
    try:
        return (
            db.query(Expense)
            .filter(Expense.user_id == user_id)
            .order_by(Expense.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("list_expenses failed for user_id=%s: %s", user_id, e)
        raise StorageFailure("Failed to fetch expenses") from e


def list_active_expenses(db: Session, user_id: int) -> List[Expense]:
    """Active expenses of one owner, newest first."""
    try:
        return _active_query(db, user_id).order_by(Expense.created_at.desc()).all()
    except SQLAlchemyError as e:
        logger.error("list_active_expenses failed for user_id=%s: %s", user_id, e)
        raise StorageFailure("Failed to fetch expenses") from e


def soft_delete_expenses_by_date(db: Session, user_id: int, day: date, now: Optional[datetime] = None) -> int:
    """
    Stamp deleted_at on every active expense of `user_id` created on `day`.
    Returns the number of rows touched; zero is not an error.
    """
    deleted_at = now or datetime.now()
    try:
        candidates = _active_query(db, user_id).all()
        matched = [e for e in candidates if matches_deletion(e, user_id, day)]
        for expense in matched:
            expense.deleted_at = deleted_at
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("soft delete failed for user_id=%s day=%s: %s", user_id, day, e)
        raise StorageFailure("Failed to delete expenses") from e

    logger.info("soft-deleted %d expenses for user_id=%s day=%s", len(matched), user_id, day)
    return len(matched)
