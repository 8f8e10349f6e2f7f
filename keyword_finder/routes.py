import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import ImmutableMultiDict

from keyword_finder.exceptions import InvalidRequestError, PipelineError
from keyword_finder.logger import get_logger
from keyword_finder.matcher import KeywordMatcher, find_keywords_in_text
from keyword_finder.metrics import MATCHED_KEYWORDS, SEARCH_OUTCOMES
from keyword_finder.models import ErrorResponse, parse_search_request
from keyword_finder.settings import settings

router = APIRouter()

logger = get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

_matcher = KeywordMatcher(
    max_workers=settings.match_workers, timeout=settings.match_timeout
)


def get_matcher() -> KeywordMatcher:
    return _matcher


def flatten_multi_params(data: ImmutableMultiDict) -> Dict[str, Any]:
    """Turn form/query fields into plain values.

    `key[]=a&key[]=b` and repeated keys become lists, a single `key=a`
    stays a string.
    """
    params: Dict[str, Any] = {}
    for key in data.keys():
        values = data.getlist(key)
        if key.endswith("[]"):
            params[key[:-2]] = list(values)
        elif key in params:
            # already filled by `key[]`
            continue
        elif len(values) > 1:
            params[key] = values
        else:
            params[key] = values[0]
    return params


async def collect_params(request: Request) -> Dict[str, Any]:
    """Merge body and query parameters; body values take precedence"""
    params: Dict[str, Any] = {}
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            logger.warning("Ignoring malformed JSON body")
            body = None
        if isinstance(body, dict):
            params.update(body)
    elif content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        params.update(flatten_multi_params(form))

    for key, value in flatten_multi_params(request.query_params).items():
        params.setdefault(key, value)

    return params


def accepts_json(request: Request) -> bool:
    """True only when the client lists application/json explicitly"""
    accept = request.headers.get("accept", "")
    media_types = [part.split(";")[0].strip().lower() for part in accept.split(",")]
    return "application/json" in media_types


def negotiated_response(
    request: Request, content: Dict[str, Any], status_code: int = 200
) -> JSONResponse:
    """JSON body, labelled as JSON or as plain text depending on Accept"""
    content_type = (
        "application/json; charset=utf-8"
        if accepts_json(request)
        else "text/plain; charset=utf-8"
    )
    return JSONResponse(
        content=content,
        status_code=status_code,
        headers={"Cache-Control": "must-revalidate", "Content-Type": content_type},
    )


@router.post("/")
async def find_keywords_endpoint(
    request: Request, matcher: KeywordMatcher = Depends(get_matcher)
):
    """Report which keywords occur in the text within the edit distance"""
    params = await collect_params(request)

    try:
        search_request = parse_search_request(params)
    except InvalidRequestError as e:
        SEARCH_OUTCOMES.labels(outcome="invalid_request").inc()
        logger.info("Rejected keyword search request", error=str(e))
        error = ErrorResponse(error=str(e))
        return negotiated_response(request, error.model_dump(), status_code=404)

    logger.info(
        "Keyword search request received",
        text_length=len(search_request.text),
        keyword_count=len(search_request.keywords),
        distance=search_request.distance,
    )

    try:
        start_time = time.time()
        response = await run_in_threadpool(
            find_keywords_in_text, search_request, matcher
        )
        duration_ms = (time.time() - start_time) * 1000
    except PipelineError as e:
        SEARCH_OUTCOMES.labels(outcome="pipeline_error").inc()
        logger.error(
            "Keyword search failed",
            error=str(e),
            error_type=type(e).__name__,
            text_length=len(search_request.text),
        )
        return negotiated_response(
            request,
            ErrorResponse(error=f"{type(e).__name__}: {e}").model_dump(),
            status_code=404,
        )

    SEARCH_OUTCOMES.labels(outcome="success").inc()
    MATCHED_KEYWORDS.observe(len(response.keywords))
    logger.info(
        "Keyword search completed successfully",
        duration_ms=round(duration_ms, 2),
        matched_keywords=[result.keyword for result in response.keywords],
    )

    return negotiated_response(request, response.model_dump())


@router.get("/ready")
async def readiness_check():
    return {"status": "ready", "service": settings.app_name}


# Health check endpoint
@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}


@router.get("/metrics")
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
