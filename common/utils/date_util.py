from datetime import datetime


def get_now_timestamp_ms() -> int:
    """
    Get the current timestamp in milliseconds
    """
    now = datetime.now()
    return int(round(now.timestamp() * 1000))


def get_timestamp_ms_of_datetime(date_obj: datetime) -> int:
    """
    Convert datetime into timestamp in milliseconds
    2024-05-01 00:00:00 -> 1714521600000

    @param date_obj: datetime
    @return: timestamp in milliseconds
    """
    return int(round(date_obj.timestamp() * 1000))


def get_timestamp_ms_of_iso_str(date_str: str) -> int:
    """
    Convert ISO-8601 date string into timestamp in milliseconds
    "2024-05-01" -> 1714521600000 (local time)

    @param date_str: date in ISO-8601 format
    @return: timestamp in milliseconds
    """
    return get_timestamp_ms_of_datetime(datetime.fromisoformat(date_str))
