"""Ticker canonicalization for Helsinki-listed securities."""

EXCHANGE_SUFFIX = "HE"


def normalize(raw: str | None) -> str:
    """
    Canonicalize a free-text symbol into its Helsinki identifier.

    Trims and uppercases the input. An existing ``.HE`` suffix is kept,
    any other suffix is replaced, and a bare symbol gets ``.HE`` appended.

    Args:
        raw: User input or provider symbol (e.g. "nokia", "NOKIA.XYZ")

    Returns:
        Canonical ticker such as "NOKIA.HE", or "" when nothing was entered
    """
    if not raw:
        return ""

    upper = raw.strip().upper()
    if not upper:
        return ""

    if "." in upper:
        base, suffix = upper.split(".", 1)
        if suffix == EXCHANGE_SUFFIX:
            return upper
        return f"{base}.{EXCHANGE_SUFFIX}"

    return f"{upper}.{EXCHANGE_SUFFIX}"


def is_canonical(value: str) -> bool:
    """Check whether value is already in canonical form."""
    return bool(value) and normalize(value) == value
