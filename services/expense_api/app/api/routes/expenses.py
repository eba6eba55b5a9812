import logging
import re
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.errors import MalformedDate
from core.security import get_current_user_id
from db.crud import (
    create_expenses,
    list_active_expenses,
    list_expenses,
    soft_delete_expenses_by_date,
)
from db.database import SessionLocal
from schemas.expense import (
    BulkExpenseInput,
    CreateExpensesResponse,
    DayDetail,
    ExpenseRecord,
    GroupedExpenseResponse,
    MessageResponse,
)
from services.aggregation import detail_for_day, group_by_day

logger = logging.getLogger(__name__)

router = APIRouter()
expenses_router = APIRouter(prefix="/expenses", tags=["expenses"])

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@router.get("/health")
def health():
    return {"status": "ok"}


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def parse_day(value: Optional[str]) -> date:
    """Strict YYYY-MM-DD; anything else is a MalformedDate."""
    if not value:
        raise MalformedDate("Date parameter is required")
    if not _DAY_RE.match(value):
        raise MalformedDate("Invalid date format. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise MalformedDate("Invalid date format. Use YYYY-MM-DD")


@expenses_router.post("", response_model=CreateExpensesResponse)
def create(
    payload: BulkExpenseInput,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    rows = create_expenses(db, user_id=user_id, items=payload.expenses)
    return CreateExpensesResponse(
        message="Expenses created successfully",
        data=[ExpenseRecord.model_validate(r) for r in rows],
    )


@expenses_router.get("", response_model=List[ExpenseRecord])
def list_user_expenses(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return [ExpenseRecord.model_validate(r) for r in list_expenses(db, user_id=user_id)]


@expenses_router.get("/by-date", response_model=List[GroupedExpenseResponse])
def expenses_by_date(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return group_by_day(list_active_expenses(db, user_id=user_id))


@expenses_router.get("/by-date/detail", response_model=DayDetail)
def expenses_by_date_detail(
    date_str: Optional[str] = Query(None, alias="date"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    day = parse_day(date_str)
    return detail_for_day(list_active_expenses(db, user_id=user_id), day)


@expenses_router.delete("/by-date", response_model=MessageResponse)
def delete_expenses_by_date(
    date_str: Optional[str] = Query(None, alias="date"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    day = parse_day(date_str)
    # count stays server-side; clients only see the message
    affected = soft_delete_expenses_by_date(db, user_id=user_id, day=day)
    logger.debug("delete by date %s affected %d rows", day, affected)
    return MessageResponse(message="Expenses deleted successfully")


router.include_router(expenses_router)
