from datetime import datetime
import threading
import time
import pytz
from question_bank.config import settings

_id_lock = threading.Lock()
_last_id = 0

def get_local_timezone():
    """Timezone used to show dates to users"""
    return pytz.timezone(settings.timezone)

def get_utc_time():
    """Get current time in UTC"""
    return datetime.now(pytz.UTC)

def utc_timestamp():
    """Current time as the ISO string stored in createdAt fields"""
    return get_utc_time().isoformat().replace("+00:00", "Z")

def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO timestamp; naive values are taken as UTC"""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=pytz.UTC)
    return dt

def convert_to_local(utc_time):
    """Convert a UTC datetime to the configured local timezone"""
    return utc_time.astimezone(get_local_timezone())

def format_date_for_display(value):
    """Format a stored timestamp as a local day/month/year date"""
    if isinstance(value, str):
        value = parse_timestamp(value)
    return convert_to_local(value).strftime(settings.date_format)

def utc_iso_date():
    """Today's date (YYYY-MM-DD) as used in export file names"""
    return get_utc_time().date().isoformat()

def generate_id(prefix: str = "") -> str:
    """Time-derived id that never repeats or goes backwards within the process"""
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return f"{prefix}{candidate}"
