# shopdesk/core/dates.py

from datetime import date, datetime

MONTHS = {
    "Jan": "01", "Feb": "02", "Mar": "03", "Apr": "04", "May": "05", "Jun": "06",
    "Jul": "07", "Aug": "08", "Sep": "09", "Oct": "10", "Nov": "11", "Dec": "12",
}


def convert_date(value):
    """Convert a 'DD-MMM-YY' export date to 'YYYY-MM-DD'.

    Anything that does not split into three dash-separated parts is returned
    untouched. Two-digit years are taken as 20YY.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return value

    parts = value.strip().split("-")
    if len(parts) != 3:
        return value

    day, month, year = parts
    day = day.zfill(2)
    month = MONTHS.get(month, month)
    if len(year) == 2:
        year = "20" + year

    return f"{year}-{month}-{day}"


def parse_iso_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None
