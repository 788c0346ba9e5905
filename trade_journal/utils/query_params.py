"""Query parameter parsing utilities."""


def parse_closed_param(value: str | None) -> bool | None:
    """
    Parse a trade status filter to an is_closed flag, None for empty values.

    Accepts: "closed"/"open", "true"/"false", "1"/"0"
    """
    if not value:
        return None
    lower = value.strip().lower()
    if lower in ("closed", "true", "1"):
        return True
    if lower in ("open", "false", "0"):
        return False
    return None
