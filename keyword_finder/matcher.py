"""
Fuzzy keyword matching over a clean token set.

Every keyword is compared against every clean token; keywords are spread
over a bounded thread pool and the results are collected back in input
order, so the output never depends on which keyword finishes first.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import List, Optional, Sequence

from keyword_finder.core import build_clean_tokens, levenshtein_distance
from keyword_finder.exceptions import MatchingError
from keyword_finder.logger import get_logger
from keyword_finder.models import (
    KeywordMatch,
    KeywordResult,
    KeywordSearchRequest,
    KeywordSearchResponse,
)

logger = get_logger(__name__)


def match_keyword(
    keyword: str,
    clean_tokens: Sequence[str],
    distance: int,
    deadline: Optional[float] = None,
) -> KeywordResult:
    """Collect the tokens within `distance` edits of `keyword`, in token order.

    `deadline` is a `time.monotonic()` value; past it the scan stops with a
    MatchingError.
    """
    if not isinstance(keyword, str):
        raise MatchingError(f"Keyword {keyword!r} is not a string")

    results = []
    for token in clean_tokens:
        if deadline is not None and time.monotonic() > deadline:
            raise MatchingError(f"Matching {keyword!r} ran past the deadline")
        token_distance = levenshtein_distance(keyword, token, score_cutoff=distance)
        if token_distance <= distance:
            results.append(KeywordMatch(text=token, distance=token_distance))

    return KeywordResult(keyword=keyword, results=results)


class KeywordMatcher:
    """Matches keywords against clean tokens on a bounded worker pool"""

    def __init__(self, max_workers: int = 4, timeout: Optional[float] = None):
        self.max_workers = max_workers
        self.timeout = timeout

    def match_all(
        self, clean_tokens: Sequence[str], keywords: Sequence[str], distance: int
    ) -> List[KeywordResult]:
        """One KeywordResult per keyword, matched or not, in keyword order"""
        if not keywords:
            return []

        deadline = None
        if self.timeout is not None:
            deadline = time.monotonic() + self.timeout

        workers = max(1, min(self.max_workers, len(keywords)))
        executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="keyword-match"
        )
        try:
            futures = [
                executor.submit(
                    match_keyword, keyword, clean_tokens, distance, deadline
                )
                for keyword in keywords
            ]

            results = []
            for future in futures:
                remaining = None
                if deadline is not None:
                    remaining = max(0.0, deadline - time.monotonic())
                results.append(future.result(timeout=remaining))
        except FuturesTimeoutError as e:
            raise MatchingError(f"Keyword matching exceeded {self.timeout}s") from e
        except MatchingError:
            raise
        except Exception as e:
            raise MatchingError(f"{type(e).__name__}: {e}") from e
        finally:
            # Running keywords stop at their own deadline check
            executor.shutdown(wait=False, cancel_futures=True)

        return results

    def find_keywords(
        self, clean_tokens: Sequence[str], keywords: Sequence[str], distance: int
    ) -> List[KeywordResult]:
        """Keywords with at least one token within `distance` edits"""
        start_time = time.time()
        results = self.match_all(clean_tokens, keywords, distance)
        matched = [result for result in results if result.results]
        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "Keyword matching completed",
            keyword_count=len(keywords),
            token_count=len(clean_tokens),
            matched_keywords=len(matched),
            duration_ms=round(duration_ms, 2),
        )
        return matched


def find_keywords_in_text(
    request: KeywordSearchRequest, matcher: KeywordMatcher
) -> KeywordSearchResponse:
    """Run the full pipeline for one validated request"""
    clean_tokens = build_clean_tokens(request.text)
    keywords = matcher.find_keywords(clean_tokens, request.keywords, request.distance)
    return KeywordSearchResponse(keywords=keywords, clean_text=" ".join(clean_tokens))
