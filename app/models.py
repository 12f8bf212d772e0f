from pydantic import BaseModel, Field
from typing import Dict
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    id: str  # SHA-256 hash of value
    value: str
    properties: StringProperties
    created_at: datetime = Field(default_factory=utc_now)
