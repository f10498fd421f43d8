"""
Installment series helpers.

Transactions are plain mappings as read from lancamentos_futuros:
descricao, status, parcelamento, numero_parcelas, parcela_atual,
parcela_info, recorrente, periodicidade, data_prevista, id.
Series fields are often inconsistent between writers, so every helper
falls back to parcela_info when the flat columns are missing.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from . import rules
from .normalize import coerce_number, normalize

logger = logging.getLogger(__name__)


class SettledTransactionError(ValueError):
    """Raised when removal is requested for a transaction already paid."""


def strip_installment_suffix(description: Optional[str]) -> Optional[str]:
    """
    Base description without the installment suffix.

    "Compra de perfume - Parcela 1/2" -> "Compra de perfume"
    "Compra de perfume - (1/2)"       -> "Compra de perfume"
    "Perfumes (2/2)"                  -> "Perfumes"
    "Algo 1/2"                        -> "Algo"
    """
    if not description:
        return description
    base = description
    for pattern in rules.SUFFIX_PATTERNS:
        base = pattern.sub("", base, count=1)
    return base.strip()


def is_multi_installment(transaction: Mapping[str, Any]) -> bool:
    """True only for series of more than one installment; 1/1 is a cash purchase."""
    flag = str(transaction.get("parcelamento")).lower()
    if flag in rules.INSTALLMENT_FLAGS and coerce_number(transaction.get("numero_parcelas")) > 1:
        return True

    if transaction.get("parcela_info"):
        descriptor = normalize(transaction["parcela_info"])
        return descriptor is not None and descriptor.total > 1

    return False


def installment_position(transaction: Mapping[str, Any]) -> Tuple[Any, Any]:
    """(current, total) from the flat columns, then parcela_info, then 1."""
    descriptor = normalize(transaction.get("parcela_info"))
    current = transaction.get("parcela_atual") or (descriptor.number if descriptor else None) or 1
    total = transaction.get("numero_parcelas") or (descriptor.total if descriptor else None) or 1
    return current, total


def _same_series_ids(transaction: Mapping[str, Any], candidates: Iterable[Mapping[str, Any]]) -> List[Any]:
    current, total = installment_position(transaction)
    base = strip_installment_suffix(transaction.get("descricao"))

    ids = []
    for candidate in candidates:
        if strip_installment_suffix(candidate.get("descricao")) != base:
            continue

        descriptor = normalize(candidate.get("parcela_info"))
        candidate_current = candidate.get("parcela_atual") or (descriptor.number if descriptor else None)
        candidate_total = candidate.get("numero_parcelas") or (descriptor.total if descriptor else None)

        if not candidate_current or not candidate_total:
            continue
        if coerce_number(candidate_total) != coerce_number(total):
            continue
        if coerce_number(candidate_current) < coerce_number(current):
            continue

        ids.append(candidate.get("id"))
    return ids


def _same_recurrence_ids(transaction: Mapping[str, Any], candidates: Iterable[Mapping[str, Any]]) -> List[Any]:
    # ISO dates (YYYY-MM-DD) compare correctly as text
    start = str(transaction.get("data_prevista") or "")
    return [
        candidate.get("id")
        for candidate in candidates
        if candidate.get("recorrente")
        and candidate.get("descricao") == transaction.get("descricao")
        and candidate.get("periodicidade") == transaction.get("periodicidade")
        and str(candidate.get("data_prevista") or "") >= start
    ]


def select_removal_ids(
    transaction: Mapping[str, Any],
    candidates: Iterable[Mapping[str, Any]],
    scope: str = rules.SCOPE_ALL,
) -> List[Any]:
    """
    Ids to remove for "this transaction" (scope single) or "this and the
    following ones of the same series" (scope all).

    Candidates are expected to be the owner's pending transactions, already
    narrowed to the same card when there is one.
    """
    if scope not in (rules.SCOPE_SINGLE, rules.SCOPE_ALL):
        raise ValueError(f"Unknown removal scope: {scope!r}")

    if transaction.get("status") in rules.SETTLED_STATUSES:
        raise SettledTransactionError(
            "A paid transaction cannot be removed; revert the payment first"
        )

    multi = is_multi_installment(transaction)
    recurring = bool(transaction.get("recorrente"))

    # Standalone transactions never take others with them
    if scope == rules.SCOPE_SINGLE or not (multi or recurring):
        return [transaction.get("id")]

    if multi:
        ids = _same_series_ids(transaction, candidates)
    else:
        ids = _same_recurrence_ids(transaction, candidates)

    logger.debug(
        "removal selection for %s: %d ids (multi=%s, recurring=%s)",
        transaction.get("id"), len(ids), multi, recurring,
    )
    return ids
