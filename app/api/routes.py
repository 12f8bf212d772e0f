from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import Optional
import logging

from app import crud
from app.database import StringStore, get_store
from app.models import StringRecord
from app.schemas import (
    HealthResponse,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringFilters,
    StringListResponse,
)
from app.utils import parse_natural_language_query

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=HealthResponse)
def root():
    """Health check endpoint"""
    return HealthResponse(status="ok")


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(status="ok")


@router.post("/strings", response_model=StringRecord, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, store: StringStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    return crud.create_string_analysis(store, string_data.value)


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1, max_length=1),
    store: StringStore = Depends(get_store),
):
    """
    Get all strings with optional filtering.
    """
    filters = StringFilters(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    strings = crud.get_all_strings(store, filters)

    return StringListResponse(
        data=strings,
        count=len(strings),
        filters_applied=filters.applied(),
    )


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query"),
    store: StringStore = Depends(get_store),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing 'query' parameter"
        )

    parsed = parse_natural_language_query(query)
    logger.info(f"Interpreted {query!r} as {parsed}")

    strings = crud.get_all_strings(store, StringFilters(**parsed))

    return NaturalLanguageResponse(
        data=strings,
        count=len(strings),
        interpreted_query=InterpretedQuery(original=query, parsed_filters=parsed),
    )


@router.get("/strings/{string_value:path}", response_model=StringRecord)
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    return crud.get_string_by_value(store, string_value)


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    crud.delete_string(store, string_value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
