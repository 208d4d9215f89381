"""
Time and identifier sources

Domain operations take these as keyword arguments so tests can pass
deterministic replacements.
"""
import uuid
from datetime import datetime, timezone
from typing import Callable


Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def uuid4_str() -> str:
    """Fresh random identifier"""
    return str(uuid.uuid4())
