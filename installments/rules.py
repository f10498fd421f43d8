"""
Deterministic installment rules.

Key names, accepted text shapes and status values shared by the
normalizer and the series helpers.
"""

import re

# Structured record keys, as stored in parcela_info
NUMBER_KEY = "numero"
TOTAL_KEY = "total"
ORIGINAL_AMOUNT_KEY = "valor_original"

QUOTE_CHARS = "\"'"
TEXT_PATTERN = re.compile(r"([0-9]+)/([0-9]+)")

# Description suffixes, removed in this order
SUFFIX_PATTERNS = (
    re.compile(r"\s*-?\s*[Pp]arcela\s*[0-9]+/[0-9]+\s*$"),
    re.compile(r"\s*-?\s*\([0-9]+/[0-9]+\)\s*$"),
    re.compile(r"\s+[0-9]+/[0-9]+\s*$"),
)

# parcelamento flag values: 'true'/'TRUE' from the app and rpc, 'sim' from imports
INSTALLMENT_FLAGS = ("true", "sim")
SETTLED_STATUSES = ("pago", "efetivado")

SCOPE_SINGLE = "single"
SCOPE_ALL = "all"
