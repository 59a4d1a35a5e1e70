from datetime import date

from daycare.utils.timezones import center_today


def months_ago(n: int) -> str:
    """ISO birth date that makes a child exactly ``n`` months old at the center today."""
    today = center_today()
    total = today.year * 12 + (today.month - 1) - n
    return date(total // 12, total % 12 + 1, 1).isoformat()
