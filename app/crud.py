from typing import List, Optional

from fastapi import status

from app.database import StringStore
from app.exceptions import InvalidValueError
from app.models import StringProperties, StringRecord
from app.schemas import StringFilters
from app.utils import analyze_string, compute_sha256


def create_string_analysis(store: StringStore, value: str) -> StringRecord:
    """Analyze a string and store it; raises ConflictError if it already exists"""
    if not isinstance(value, str):
        raise InvalidValueError("Value must be a string", status.HTTP_422_UNPROCESSABLE_ENTITY)

    properties = StringProperties(**analyze_string(value))
    record = StringRecord(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
    )
    return store.insert(record)


def get_string_by_value(store: StringStore, value: str) -> StringRecord:
    """Get string analysis by value; raises NotFoundError if absent"""
    return store.get(compute_sha256(value))


def matches_filters(record: StringRecord, filters: StringFilters) -> bool:
    """True if the record satisfies every filter that is set"""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character is not None:
        if not props.character_frequency_map.get(filters.contains_character):
            return False

    return True


def get_all_strings(store: StringStore, filters: Optional[StringFilters] = None) -> List[StringRecord]:
    """Get all strings with optional filters"""
    if filters is None or not filters.applied():
        return store.all()
    return store.list(lambda record: matches_filters(record, filters))


def delete_string(store: StringStore, value: str) -> None:
    """Delete string analysis by value; raises NotFoundError if absent"""
    store.delete(compute_sha256(value))
