from pydantic import BaseModel, Field, StrictStr, field_validator
from typing import Any, Dict, List, Optional

from app.models import StringRecord


class StringCreate(BaseModel):
    value: StrictStr = Field(..., description="String to analyze")

    @field_validator("value")
    @classmethod
    def validate_encodable(cls, v):
        """Reject lone surrogates, which cannot be sent back as UTF-8 JSON"""
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("value must be valid Unicode text")
        return v


class StringFilters(BaseModel):
    """Structured filters; every field is optional and they are AND-combined."""

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def applied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class StringListResponse(BaseModel):
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any] = {}


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery


class HealthResponse(BaseModel):
    status: str = "ok"
