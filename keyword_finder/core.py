import re
from typing import Iterable, List, Optional, Union

from rapidfuzz.distance import Levenshtein

from keyword_finder.exceptions import TokenizationError
from keyword_finder.logger import get_logger
from keyword_finder.stopwords import STOPWORDS

logger = get_logger(__name__)

# Anything that is not a Unicode letter, digit or underscore separates words
WORD_DELIMITER = re.compile(r"\W+")

Token = Union[str, bool]


def tokenize_text(text: str) -> List[str]:
    """Split text into word tokens, dropping whitespace and punctuation"""
    if not isinstance(text, str):
        raise TokenizationError(
            f"Cannot tokenize value of type {type(text).__name__}"
        )

    tokens = [token for token in WORD_DELIMITER.split(text) if token]

    logger.debug("Tokenization completed", token_count=len(tokens))
    return tokens


def normalize_token(token: object) -> Token:
    """Lowercase a token; anything that isn't a string becomes False"""
    if isinstance(token, str):
        return token.lower()
    return False


def normalize_tokens(tokens: Iterable[object]) -> List[Token]:
    return [normalize_token(token) for token in tokens]


def unique_tokens(tokens: Iterable[Token]) -> List[Token]:
    """Drop repeated tokens, keeping the first occurrence of each"""
    return list(dict.fromkeys(tokens))


def remove_stopwords(tokens: Iterable[Token], stopwords=STOPWORDS) -> List[str]:
    """Keep the string tokens that are not stopwords.

    False markers left by the normalizer are dropped here so the clean
    token set only ever holds strings.
    """
    return [
        token
        for token in tokens
        if isinstance(token, str) and token not in stopwords
    ]


def levenshtein_distance(
    text1: str, text2: str, score_cutoff: Optional[int] = None
) -> int:
    """Levenshtein edit distance between two strings.

    With score_cutoff set, distances above the cutoff are reported as
    score_cutoff + 1. Any cutoff is accepted, however large.
    """
    if score_cutoff is not None:
        # the distance never exceeds the longer string; rapidfuzz needs a C integer
        score_cutoff = min(score_cutoff, max(len(text1), len(text2)))
    return Levenshtein.distance(text1, text2, score_cutoff=score_cutoff)


def build_clean_tokens(text: str) -> List[str]:
    """Tokenize, lowercase, deduplicate and drop stopwords, in that order"""
    tokens = tokenize_text(text)
    normalized = normalize_tokens(tokens)
    unique = unique_tokens(normalized)
    clean = remove_stopwords(unique)

    logger.info(
        "Clean text built",
        token_count=len(tokens),
        unique_count=len(unique),
        clean_count=len(clean),
    )
    return clean
