from datetime import datetime, timedelta, timezone

PENDING = "pending"
ACTIVE = "active"
ENDED = "ended"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value) -> datetime:
    """
    Parses an ISO-8601 timestamp into an aware datetime.
    A trailing "Z" is accepted and naive values are taken as UTC.
    :raises ValueError: if the value is not a parseable timestamp.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def canonical_voter_id(voter_id: str) -> str:
    return voter_id.strip().upper()


class ElectionWindow:
    def __init__(self, start_time: str, end_time: str):
        self.start_time = start_time
        self.end_time = end_time
        self.start = parse_timestamp(start_time)
        self.end = parse_timestamp(end_time)
        if self.start >= self.end:
            raise ValueError("Start time must be before end time")

    @classmethod
    def starting_at(cls, now: datetime, hours: int = 24) -> "ElectionWindow":
        return cls(format_timestamp(now), format_timestamp(now + timedelta(hours=hours)))

    @classmethod
    def from_config(cls, config) -> "ElectionWindow":
        if not isinstance(config, dict):
            raise ValueError("Election config must be an object")
        return cls(config.get("startTime"), config.get("endTime"))

    def status(self, now: datetime) -> str:
        # Recomputed on every call, nothing about the window is stored.
        if now < self.start:
            return PENDING
        if now > self.end:
            return ENDED
        return ACTIVE

    def has_started(self, now: datetime) -> bool:
        return now >= self.start

    def to_config(self) -> dict:
        return {"startTime": self.start_time, "endTime": self.end_time}
