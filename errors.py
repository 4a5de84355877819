"""
Error taxonomy for the brand pricing service.

- UnknownCategory: category label that does not resolve (client error)
- InvalidInput: negative or non-integer price, malformed brand payload (client error)
- BrandNotFound: brand id or name absent on read or mutate
- InternalError: anything unexpected, e.g. storage failures

Each class carries the HTTP status and error title a client-facing layer
should use when reporting it.
"""

import logging
from typing import Dict, Tuple

logger = logging.getLogger(__name__)


class PricingError(Exception):
    """Base class for all pricing service errors"""
    status_code = 500
    title = "서버 오류"


class UnknownCategory(PricingError, ValueError):
    """Category label did not match any known category"""
    status_code = 400
    title = "잘못된 카테고리 이름"


class InvalidInput(PricingError, ValueError):
    """Price or brand payload failed validation"""
    status_code = 400
    title = "잘못된 인자"


class BrandNotFound(PricingError, LookupError):
    """No brand with the requested id or name"""
    status_code = 404
    title = "브랜드를 찾을 수 없음"


class InternalError(PricingError):
    """Unexpected failure (storage, programming error)"""
    status_code = 500
    title = "서버 오류"


def error_response(exc: BaseException) -> Tuple[Dict[str, str], int]:
    """
    Map an exception to an error body and HTTP status.

    Returns:
        Tuple of ({"error": title, "message": detail}, status_code)
    """
    if isinstance(exc, PricingError):
        return {"error": exc.title, "message": str(exc)}, exc.status_code

    logger.error(f"Unexpected error: {exc!r}")
    return {"error": InternalError.title, "message": str(exc)}, InternalError.status_code
