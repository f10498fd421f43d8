from __future__ import annotations

from datetime import date
from typing import List

from dateutil.relativedelta import relativedelta

from .models import InstallmentDescriptor, InstallmentRow


def build_installment_plan(total_amount: float, count: int, first_due_date: date) -> List[InstallmentRow]:
    """
    Split a purchase into `count` monthly installments.

    Each row is due `i` calendar months after the first due date (Jan 31
    rolls to the last day of February) and carries the parcela_info record
    the rest of the application reads back.
    """
    if count < 1:
        raise ValueError("An installment plan needs at least one installment")

    amount = total_amount / count
    rows = []
    for i in range(count):
        # Offset from the first date, not from the previous row, so month-ends do not drift
        due = first_due_date + relativedelta(months=i)
        rows.append(InstallmentRow(
            number=i + 1,
            total=count,
            amount=amount,
            due_date=due,
            month=due.strftime("%Y-%m"),
            parcela_info=InstallmentDescriptor(
                number=i + 1,
                total=count,
                original_amount=total_amount,
            ),
        ))
    return rows
