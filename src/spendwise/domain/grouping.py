"""Temporal bucketing of transactions for trend views."""

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from spendwise.domain.entities import Bucket, ComparisonBucket, Granularity, Transaction
from spendwise.utils.date_parser import week_start

logger = logging.getLogger(__name__)

HOUR_LABELS = tuple(f"{hour:02d}" for hour in range(24))


def _hour_buckets(transactions: Iterable[Transaction], selected_date: date) -> list[Bucket]:
    totals = {label: Decimal("0") for label in HOUR_LABELS}
    for txn in transactions:
        if txn.date != selected_date or not txn.time:
            continue
        hour = txn.time[:2]
        if hour not in totals:
            logger.warning("Skipping transaction %s with bad time %r", txn.id, txn.time)
            continue
        # Signed amount, unlike the other views.
        totals[hour] += txn.amount
    return [Bucket(label, amount) for label, amount in totals.items()]


def _week_buckets(transactions: Iterable[Transaction], selected_week_start: date) -> list[Bucket]:
    monday = week_start(selected_week_start)
    days = [monday + timedelta(days=offset) for offset in range(7)]
    totals = {day: Decimal("0") for day in days}
    for txn in transactions:
        if txn.date in totals:
            totals[txn.date] += abs(txn.amount)
    return [Bucket(day.isoformat(), amount) for day, amount in totals.items()]


def _period_label(day: date, granularity: Granularity) -> str:
    if granularity == Granularity.DAY:
        return day.isoformat()
    if granularity == Granularity.MONTH:
        return day.strftime("%Y-%m")
    return day.strftime("%Y")


def _period_totals(
    transactions: Iterable[Transaction], granularity: Granularity
) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for txn in transactions:
        totals[_period_label(txn.date, granularity)] += abs(txn.amount)
    return dict(totals)


def group_by(
    transactions: Sequence[Transaction],
    granularity: Granularity | str,
    selected_date: Optional[date] = None,
    selected_week_start: Optional[date] = None,
) -> list[Bucket]:
    """Bucket transactions by hour, day, week, month or year.

    - hour: 24 zero-filled buckets "00".."23" for ``selected_date``
      (default today); only transactions carrying a time count.
    - week: 7 zero-filled day buckets for the Monday-anchored week
      containing ``selected_week_start`` (default this week).
    - day: one bucket per date present, in first-seen order.
    - month: one bucket per ``YYYY-MM`` present, ascending.
    - year: one bucket per ``YYYY`` present, in first-seen order.

    Args:
        transactions: Transactions to bucket
        granularity: Bucket size
        selected_date: Day shown by the hour view
        selected_week_start: Any day of the week shown by the week view

    Returns:
        Ordered list of buckets
    """
    granularity = Granularity(granularity)

    if granularity == Granularity.HOUR:
        return _hour_buckets(transactions, selected_date or date.today())

    if granularity == Granularity.WEEK:
        return _week_buckets(transactions, selected_week_start or date.today())

    totals = _period_totals(transactions, granularity)
    buckets = [Bucket(label, amount) for label, amount in totals.items()]
    if granularity == Granularity.MONTH:
        buckets.sort(key=lambda bucket: bucket.label)
    return buckets


def _previous_label(label: str, granularity: Granularity) -> str:
    if granularity == Granularity.DAY:
        return (date.fromisoformat(label) - timedelta(days=1)).isoformat()
    if granularity == Granularity.MONTH:
        first = date.fromisoformat(f"{label}-01")
        return (first - relativedelta(months=1)).strftime("%Y-%m")
    return f"{int(label) - 1:04d}"


def compare_with_previous(
    transactions: Sequence[Transaction],
    granularity: Granularity | str,
    selected_date: Optional[date] = None,
    selected_week_start: Optional[date] = None,
) -> list[ComparisonBucket]:
    """Pair each bucket with the matching bucket of the preceding period.

    Pairing is by key rather than list position: the same hour of the
    previous day, the same weekday of the previous week, and the previous
    day, month or year for the other views. Counterparts with no
    transactions read as zero.
    """
    granularity = Granularity(granularity)

    if granularity == Granularity.HOUR:
        selected_date = selected_date or date.today()
        current = group_by(transactions, granularity, selected_date=selected_date)
        previous = {
            bucket.label: bucket.amount
            for bucket in group_by(
                transactions, granularity, selected_date=selected_date - timedelta(days=1)
            )
        }
        return [
            ComparisonBucket(bucket.label, bucket.amount, bucket.label, previous[bucket.label])
            for bucket in current
        ]

    if granularity == Granularity.WEEK:
        monday = week_start(selected_week_start or date.today())
        current = group_by(transactions, granularity, selected_week_start=monday)
        previous = {
            bucket.label: bucket.amount
            for bucket in group_by(
                transactions, granularity, selected_week_start=monday - timedelta(days=7)
            )
        }
        result = []
        for bucket in current:
            previous_label = (date.fromisoformat(bucket.label) - timedelta(days=7)).isoformat()
            result.append(
                ComparisonBucket(bucket.label, bucket.amount, previous_label, previous[previous_label])
            )
        return result

    totals = _period_totals(transactions, granularity)
    result = []
    for bucket in group_by(transactions, granularity):
        previous_label = _previous_label(bucket.label, granularity)
        result.append(
            ComparisonBucket(
                bucket.label,
                bucket.amount,
                previous_label,
                totals.get(previous_label, Decimal("0")),
            )
        )
    return result
