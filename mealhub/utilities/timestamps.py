from datetime import datetime, timezone


def now_iso() -> str:
    """UTC timestamp in the ISO-8601 form stored on every document (``...Z``)."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
