"""
Month labels for grouped transaction history.

Month names are kept in tables here rather than read from the process
locale, which is global state and varies between machines.
"""

from datetime import datetime


MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "pt_BR": (
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
    "en_US": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}


def format_month_label(moment: datetime, locale: str = "pt_BR") -> str:
    """
    Full month name followed by the year, e.g. 'janeiro 2024'.

    Raises:
        ValueError: If the locale has no month table
    """
    try:
        names = MONTH_NAMES[locale]
    except KeyError:
        raise ValueError(
            f"Unsupported locale: {locale}. Supported: {', '.join(MONTH_NAMES)}"
        )
    return f"{names[moment.month - 1]} {moment.year}"
