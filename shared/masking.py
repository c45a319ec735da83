"""Masking helpers for values that may reach logs."""


def mask_phone(phone: str) -> str:
    """Keep the last four characters visible."""
    visible = phone[-4:]
    return "*" * max(len(phone) - len(visible), 0) + visible
