import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # SQLite DateTime은 타임존을 저장하지 않으므로 naive UTC로 보관합니다.
    return datetime.now(timezone.utc).replace(tzinfo=None)
