"""
예외 → JSON 응답 변환

- MarathonError: ErrorResponse (status_code는 예외에 정의된 값)
- RequestValidationError: 400 VALIDATION_ERROR (FastAPI 기본 422 대신)
- 그 외 예외: 500 INTERNAL_ERROR
- 500번대 응답의 내부 상세는 DEBUG 모드에서만 포함
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import MarathonError


logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    error_code: str,
    error_message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content = {
        "error": True,
        "error_code": error_code,
        "error_message": error_message,
        "details": details,
    }
    return JSONResponse(status_code=status_code, content=content)


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({
            "field": loc[0] if loc else "body",
            "message": err.get("msg", "Invalid value"),
        })
    return errors


def register_exception_handlers(app: FastAPI, debug: bool) -> None:
    """앱에 예외 핸들러 등록"""

    @app.exception_handler(MarathonError)
    async def handle_marathon_error(request: Request, exc: MarathonError) -> JSONResponse:
        details = exc.details
        if exc.status_code >= 500:
            logger.error(f"[{request.url.path}] {exc.error_code}: {exc.message} {details or ''}")
            if not debug:
                details = None
        return error_response(exc.status_code, exc.error_code, exc.message, details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = _field_errors(exc)
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            "Invalid request: " + ", ".join(e["field"] for e in errors),
            {"errors": errors},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"[{request.url.path}] 처리되지 않은 오류: {str(exc)}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            str(exc) if debug else "Something went wrong",
        )
