from datetime import datetime, timezone

def parse_date(s: str | None) -> datetime:
    """ISO-8601 → datetime UTC; sin valor, ahora. Fechas sin zona se toman como UTC."""
    if not s:
        return datetime.now(timezone.utc)
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
