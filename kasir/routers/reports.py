from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import reports as aggregator
from ..database import get_db
from ..errors import ValidationError
from ..schemas import ErrorOut, SalesReport

router = APIRouter(
    prefix="/api/report",
    tags=["report"],
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)


@router.get("/hari-ini", response_model=SalesReport, response_model_exclude_none=True)
def get_today_report(db: Session = Depends(get_db)) -> SalesReport:
    return aggregator.get_today_report(db)


@router.get("", response_model=SalesReport, response_model_exclude_none=True)
def get_report_by_date_range(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    db: Session = Depends(get_db),
) -> SalesReport:
    if not start_date or not end_date:
        raise ValidationError("start_date and end_date are required (format: YYYY-MM-DD)")
    return aggregator.get_report_by_date_range(db, start_date, end_date)
