"""
Billing-cycle arithmetic and proration.

Pure functions: callers pass ``now`` so results are deterministic.
"""

import calendar
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel

from .entities.enums import BillingCycle

CENT = Decimal("0.01")

CYCLE_MONTHS = {
    BillingCycle.monthly: 1,
    BillingCycle.yearly: 12,
}


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def add_months(moment: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def cycle_end(starts_at: datetime, billing_cycle: BillingCycle) -> Optional[datetime]:
    """End of the first billing cycle starting at ``starts_at``; None for lifetime plans."""
    months = CYCLE_MONTHS.get(billing_cycle)
    if months is None:
        return None
    return add_months(starts_at, months)


class ProrationQuote(BaseModel):
    proration_amount: Decimal
    days_remaining: int
    unused_amount: Decimal
    new_amount: Decimal


def calculate_proration(
    current_amount: Optional[Decimal],
    starts_at: Optional[datetime],
    billing_cycle: Optional[BillingCycle],
    candidate_price: Decimal,
    now: datetime,
) -> ProrationQuote:
    """
    Quote a mid-cycle plan switch.

    unused = (current amount / days in cycle) * whole days left in the cycle;
    proration = candidate price - unused, negative when the tenant is owed a credit.
    Without a current subscription nothing is prorated.
    """
    new_amount = to_money(candidate_price)
    if current_amount is None or starts_at is None or billing_cycle is None:
        return ProrationQuote(
            proration_amount=to_money(0),
            days_remaining=0,
            unused_amount=to_money(0),
            new_amount=new_amount,
        )

    end = cycle_end(starts_at, billing_cycle)
    if end is None:
        # Lifetime plans have no cycle left to refund.
        return ProrationQuote(
            proration_amount=new_amount,
            days_remaining=0,
            unused_amount=to_money(0),
            new_amount=new_amount,
        )

    days_in_cycle = max((end - starts_at).days, 1)
    days_remaining = max((end - now).days, 0)

    unused = Decimal(str(current_amount)) / Decimal(days_in_cycle) * Decimal(days_remaining)
    unused_amount = to_money(unused)
    return ProrationQuote(
        proration_amount=to_money(new_amount - unused_amount),
        days_remaining=days_remaining,
        unused_amount=unused_amount,
        new_amount=new_amount,
    )
