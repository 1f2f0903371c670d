import re
from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .database import translate_store_errors
from .errors import ValidationError
from .models import Product, Transaction, TransactionDetail
from .schemas import BestSeller, SalesReport

DATE_FORMAT = "%Y-%m-%d"
ONE_DAY = timedelta(hours=24)
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def local_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min).astimezone()


def aggregate(db: Session, start: datetime, end: datetime) -> SalesReport:
    """
    Summarise transactions created in the half-open interval [start, end).

    The best seller is the product with the largest summed quantity over the
    matching detail rows. Ties are resolved by whatever order the database
    returns first.
    """
    in_range = (Transaction.created_at >= start, Transaction.created_at < end)

    totals_stmt = select(
        func.coalesce(func.sum(Transaction.total_amount), 0),
        func.count(Transaction.id),
    ).where(*in_range)

    qty_sold = func.sum(TransactionDetail.quantity).label("qty_sold")
    best_seller_stmt = (
        select(Product.name, qty_sold)
        .select_from(TransactionDetail)
        .join(Transaction, TransactionDetail.transaction_id == Transaction.id)
        .join(Product, TransactionDetail.product_id == Product.id)
        .where(*in_range)
        .group_by(Product.id, Product.name)
        .order_by(qty_sold.desc())
        .limit(1)
    )

    with translate_store_errors(db, "aggregate sales report"):
        total_revenue, transaction_count = db.execute(totals_stmt).one()
        best_row = db.execute(best_seller_stmt).first()

    report = SalesReport(
        total_revenue=int(total_revenue or 0),
        total_transaction_count=int(transaction_count or 0),
    )
    if best_row is not None:
        report.best_seller = BestSeller(name=best_row.name, quantity_sold=int(best_row.qty_sold))
    return report


def get_today_report(db: Session, now: datetime | None = None) -> SalesReport:
    now = now or datetime.now()
    start = local_midnight(now.date())
    report = aggregate(db, start, start + ONE_DAY)
    report.start_date = start.strftime(DATE_FORMAT)
    report.end_date = now.strftime(DATE_FORMAT)
    return report


def parse_date(value: str) -> date:
    # zero-padded only; strptime alone would take 2024-1-1
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD") from exc


def get_report_by_date_range(db: Session, start_str: str, end_str: str) -> SalesReport:
    """Report for whole calendar days; ``end_str`` is inclusive."""
    start = local_midnight(parse_date(start_str))
    end = local_midnight(parse_date(end_str)) + ONE_DAY

    report = aggregate(db, start, end)
    report.start_date = start_str
    report.end_date = end_str
    return report
