"""
Installment descriptor normalization.

parcela_info reaches us in whatever shape the writer used:
- structured record: {"numero": 1, "total": 2, "valor_original": 100}
- text, possibly quoted: '"1/2"', "1/2", " 1/1 "
- nothing at all (null, "")

Every input is classified into exactly one RawShape first, then extracted.
Missing and malformed input both normalize to None; nothing here raises.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from . import rules
from .models import InstallmentDescriptor, Number


class RawShape(str, Enum):
    EMPTY = "empty"
    STRUCTURED = "structured"
    TEXT = "text"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Classified:
    shape: RawShape
    payload: Any = None


def classify(raw: Any) -> Classified:
    if not raw:
        return Classified(RawShape.EMPTY)

    if isinstance(raw, InstallmentDescriptor):
        return Classified(RawShape.STRUCTURED, raw.to_wire())

    if isinstance(raw, Mapping) and rules.NUMBER_KEY in raw and rules.TOTAL_KEY in raw:
        return Classified(RawShape.STRUCTURED, raw)

    if isinstance(raw, str):
        return Classified(RawShape.TEXT, raw)

    return Classified(RawShape.UNRECOGNIZED, raw)


def coerce_number(value: Any) -> Number:
    """
    Loose numeric coercion for structured records.

    bool -> 0/1, None and blank text -> 0, numeric text -> its value,
    anything else -> nan. Integral finite values come back as int.
    """
    if isinstance(value, bool):
        return int(value)
    if value is None:
        return 0

    if isinstance(value, Decimal):
        number = math.nan if value.is_nan() else float(value)
    elif isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        # float() also accepts digit separators, which are not numbers here
        if "_" in text:
            return math.nan
        try:
            number = float(text)
        except ValueError:
            return math.nan
    else:
        return math.nan

    if isinstance(number, float) and math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def _from_record(record: Mapping) -> InstallmentDescriptor:
    # No range check on this path: records are passed through as coerced
    original = record.get(rules.ORIGINAL_AMOUNT_KEY)
    return InstallmentDescriptor(
        number=coerce_number(record[rules.NUMBER_KEY]),
        total=coerce_number(record[rules.TOTAL_KEY]),
        original_amount=coerce_number(original) if original else None,
    )


def _from_text(text: str) -> Optional[InstallmentDescriptor]:
    cleaned = text
    for quote in rules.QUOTE_CHARS:
        cleaned = cleaned.replace(quote, "")
    cleaned = cleaned.strip()

    match = rules.TEXT_PATTERN.fullmatch(cleaned)
    if match is None:
        return None

    number = int(match.group(1), 10)
    total = int(match.group(2), 10)
    if number < 1 or total < 1 or number > total:
        return None

    return InstallmentDescriptor(number=number, total=total)


def normalize(raw: Any) -> Optional[InstallmentDescriptor]:
    """
    Normalize a raw parcela_info value.

    Returns the descriptor, or None when the value is missing or unusable.
    """
    classified = classify(raw)

    if classified.shape is RawShape.STRUCTURED:
        return _from_record(classified.payload)
    if classified.shape is RawShape.TEXT:
        return _from_text(classified.payload)
    return None


def _render(value: Number) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
    return str(value)


def format_installment(raw: Any) -> Optional[str]:
    """Display form "N/M", or None when there is nothing to show."""
    descriptor = normalize(raw)
    if descriptor is None:
        return None
    return f"{_render(descriptor.number)}/{_render(descriptor.total)}"
