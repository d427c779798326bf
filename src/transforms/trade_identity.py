"""Content-addressed trade identity.

This module derives the stable identity hash that serves as a trade's
primary key and dedup key across ingest runs.
"""

from __future__ import annotations

import hashlib

from core.constants import HASH_ALGORITHM
from core.numeric import format_number


def build_identity_hash(
    account_id: str,
    item_name: str,
    status: str,
    closed_quantity: float,
    received_post_tax: float,
    tax_paid: float,
    profit: float,
    closed_time: str,
) -> str:
    """Build a deterministic identity hash for one trade.

    Numbers are rendered in plain decimal form before hashing so that
    ``5`` and ``5.0`` produce the same identity.

    Args:
        account_id: Trading account id.
        item_name: Trimmed item name.
        status: Export status.
        closed_quantity: Units sold.
        received_post_tax: Sale proceeds after tax.
        tax_paid: Sale tax paid.
        profit: Reported profit.
        closed_time: Raw closing timestamp.

    Returns:
        Hex digest string.
    """
    identity_fields = (
        account_id,
        item_name,
        status,
        format_number(closed_quantity),
        format_number(received_post_tax),
        format_number(tax_paid),
        format_number(profit),
        closed_time,
    )
    return _hash_text("|".join(identity_fields))


def _hash_text(text: str) -> str:
    """Hash a string using configured digest algorithm.

    Args:
        text: Input text.

    Returns:
        Hex digest string.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()
