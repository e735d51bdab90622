from datetime import datetime


def format_trip_date(value: datetime) -> str:
    """Long human readable date, e.g. 'March 5, 2027'."""
    return f"{value:%B} {value.day}, {value.year}"
