from datetime import datetime, timedelta, timezone as dt_tz


def utc_now():
    return datetime.now(dt_tz.utc)


def days_after(moment, days: int):
    return moment + timedelta(days=days)


def to_local_iso(dt, tz):
    return dt.astimezone(tz).isoformat()
