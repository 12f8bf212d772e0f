import hashlib
from collections import Counter
from typing import Any, Dict
import re

LONGER_THAN_PATTERN = re.compile(r"longer than (\d+)")
SHORTER_THAN_PATTERN = re.compile(r"shorter than (\d+)")
CONTAINING_LETTER_PATTERN = re.compile(r"containing the letter ([a-z])")

# Whitespace as JavaScript's \s defines it, so \x1c-\x1f and \x85 are not separators.
WHITESPACE_PATTERN = re.compile(
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string (lone surrogates are hashed as-is)"""
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, ignoring all whitespace)"""
    cleaned = WHITESPACE_PATTERN.sub("", text).lower()
    return cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by runs of whitespace"""
    return len([word for word in WHITESPACE_PATTERN.split(text) if word])


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str) -> Dict[str, Any]:
    """
    Analyze a string and return all computed properties.

    Python strings are sequences of code points, so ``len`` and ``set`` count
    characters rather than UTF-8 bytes.
    """
    return {
        "length": len(value),
        "is_palindrome": is_palindrome(value),
        "unique_characters": count_unique_characters(value),
        "word_count": count_words(value),
        "sha256_hash": compute_sha256(value),
        "character_frequency_map": get_character_frequency(value),
    }


def parse_natural_language_query(query: str) -> Dict[str, Any]:
    """
    Parse natural language query into filter parameters
    Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings longer than 10 characters" -> {min_length: 11}
    - "strings containing the letter z" -> {contains_character: "z"}

    Rules are checked independently, so a later rule may overwrite
    ``contains_character`` set by an earlier one ("first vowel" then
    "letter z" yields "z"). Queries nothing matches give an empty dict.
    """
    query = query.lower()
    filters: Dict[str, Any] = {}

    if "palindrom" in query:
        filters["is_palindrome"] = True

    if "single word" in query or "one word" in query:
        filters["word_count"] = 1

    length_match = LONGER_THAN_PATTERN.search(query)
    if length_match:
        filters["min_length"] = int(length_match.group(1)) + 1

    length_match = SHORTER_THAN_PATTERN.search(query)
    if length_match:
        filters["max_length"] = int(length_match.group(1)) - 1

    letter_match = CONTAINING_LETTER_PATTERN.search(query)
    if letter_match:
        filters["contains_character"] = letter_match.group(1)

    if "first vowel" in query:
        filters["contains_character"] = "a"

    if "letter z" in query:
        filters["contains_character"] = "z"

    return filters
