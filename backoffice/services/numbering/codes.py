"""Well-known numbering rule codes used across the back office."""

from enum import StrEnum


class NumberingRuleCode(StrEnum):
    """Rule codes requested by document-creating flows.

    The generator itself accepts any code; this is the naming contract with callers.
    """

    ORDER = "ORDER"  # Sales order
    PURCHASE_ORDER = "PO"
    REFUND = "REFUND"
    GOODS_RECEIPT = "GR"
    GOODS_ISSUE = "GI"
    STOCK_COUNT = "SC"
    STOCK_TRANSFER = "ST"
    STOCK_ADJUSTMENT = "SA"
    INVOICE = "INV"
    HOLD_ORDER = "HOLD"  # Parked POS cart
    POS_SESSION = "POS"
    CASHIER_SHIFT = "SHIFT"
    CUSTOMER = "CUST"
