# Request/Response Models
import re
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from keyword_finder.exceptions import InvalidRequestError

MISSING_TEXT = "No text submitted to analyze!"
MISSING_KEYWORDS = "Keyword(s) are missing! Keywords should be passed as an array."
INVALID_DISTANCE = "Distance is missing or it isn't an unsigned integer value."

# Integer-valued numerals as sent in forms and query strings: "3", " 3 ", "+3", "3.0"
DISTANCE_PATTERN = re.compile(
    r"\s*(?P<number>[+-]?[0-9]+)(?:\.(?P<fraction>[0-9]*))?\s*"
)


class KeywordSearchRequest(BaseModel):
    text: str = Field(..., description="Text to search in")
    keywords: List[str] = Field(..., description="Keywords to look for")
    distance: int = Field(..., gt=0, description="Maximum edit distance")


class KeywordMatch(BaseModel):
    text: str
    distance: int


class KeywordResult(BaseModel):
    keyword: str
    results: List[KeywordMatch]


class KeywordSearchResponse(BaseModel):
    keywords: List[KeywordResult]
    clean_text: str


class ErrorResponse(BaseModel):
    error: str


def parse_distance(value: Any) -> Optional[int]:
    """Return the integer a quasi-numeric value stands for, or None.

    Accepts ints, integral floats and integer numerals; rejects booleans,
    fractional values and anything with trailing garbage.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        match = DISTANCE_PATTERN.fullmatch(value)
        if match is None or (match.group("fraction") or "").strip("0"):
            return None
        return int(match.group("number"))
    return None


def parse_search_request(params: Mapping[str, Any]) -> KeywordSearchRequest:
    """Validate merged request parameters, first failing field wins"""
    # an explicit null is present; the model rejects it below
    if "text" not in params:
        raise InvalidRequestError(MISSING_TEXT)

    keywords = params.get("keywords")
    if keywords is None or not isinstance(keywords, list):
        raise InvalidRequestError(MISSING_KEYWORDS)

    distance = parse_distance(params.get("distance"))
    if distance is None or distance <= 0:
        raise InvalidRequestError(INVALID_DISTANCE)

    try:
        return KeywordSearchRequest(
            text=params["text"], keywords=keywords, distance=distance
        )
    except ValidationError as e:
        # Wrong element types, e.g. a number in place of the text
        raise InvalidRequestError(str(e)) from e
