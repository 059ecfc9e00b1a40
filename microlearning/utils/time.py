from datetime import timedelta, timezone as dt_tz

from django.utils import timezone

ONE_DAY = timedelta(days=1)


def local_date(dt):
    """Calendar date of an aware datetime in the configured TIME_ZONE."""
    return timezone.localdate(dt)


def to_utc_iso(dt):
    return dt.astimezone(dt_tz.utc).isoformat()
