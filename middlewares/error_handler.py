import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import DataIntegrityError, GradeEngineError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, detail: ErrorDetail) -> JSONResponse:
    body = ErrorResponse(error=detail, latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    # ✅ 성적 엔진 도메인 에러 → 각 에러의 status_code/code 사용
    @app.exception_handler(GradeEngineError)
    async def grade_engine_exception_handler(request: Request, exc: GradeEngineError):
        details = exc.offending if isinstance(exc, DataIntegrityError) else []
        logger.warning("%s %s failed: [%s] %s", request.method, request.url.path, exc.code, exc.message)
        return _error_response(exc.status_code, ErrorDetail(code=exc.code, message=exc.message, details=details))

    # ✅ 처리되지 않은 예외 → 500
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, ErrorDetail(code="INTERNAL_ERROR", message=str(exc)))
