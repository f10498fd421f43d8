from datetime import date

import pytest

from installments.normalize import format_installment, normalize
from installments.plan import build_installment_plan


def test_plan_splits_amount_and_numbers_rows():
    rows = build_installment_plan(600.0, 3, date(2024, 5, 10))

    assert [row.number for row in rows] == [1, 2, 3]
    assert all(row.total == 3 for row in rows)
    assert all(row.amount == 200.0 for row in rows)
    assert [row.due_date for row in rows] == [date(2024, 5, 10), date(2024, 6, 10), date(2024, 7, 10)]
    assert [row.month for row in rows] == ["2024-05", "2024-06", "2024-07"]


def test_plan_clamps_month_end_without_drift():
    rows = build_installment_plan(100.0, 4, date(2023, 1, 31))
    assert [row.due_date for row in rows] == [
        date(2023, 1, 31),
        date(2023, 2, 28),
        date(2023, 3, 31),
        date(2023, 4, 30),
    ]


def test_plan_crosses_year():
    rows = build_installment_plan(120.0, 2, date(2024, 12, 5))
    assert [row.month for row in rows] == ["2024-12", "2025-01"]


def test_plan_rows_carry_readable_parcela_info():
    rows = build_installment_plan(250.0, 5, date(2024, 1, 1))

    for row in rows:
        wire = row.parcela_info.to_wire()
        assert wire == {"numero": row.number, "total": 5, "valor_original": 250.0}
        assert normalize(wire) == row.parcela_info
        assert format_installment(wire) == f"{row.number}/5"


def test_plan_single_installment():
    rows = build_installment_plan(80.0, 1, date(2024, 1, 15))
    assert len(rows) == 1
    assert rows[0].parcela_info.total == 1


@pytest.mark.parametrize("count", [0, -2])
def test_plan_requires_one_installment(count):
    with pytest.raises(ValueError):
        build_installment_plan(100.0, count, date(2024, 1, 1))
