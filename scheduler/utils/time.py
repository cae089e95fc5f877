from zoneinfo import ZoneInfo

from django.conf import settings

def local_tz():
    return ZoneInfo(settings.TIME_ZONE)

def to_local_iso(dt_utc):
    return dt_utc.astimezone(local_tz()).isoformat()
