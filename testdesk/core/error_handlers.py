# File: /testdesk/core/error_handlers.py | Version: 1.0 | Title: Envelope-shaped error responses
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from testdesk.core.exceptions import BusinessError
from testdesk.core.i18n import Translator, normalize_locale
from testdesk.core.result_codes import HTTP_STATUS_CODES, ResultCode

log = logging.getLogger(__name__)


def _translator(req: Request) -> Translator:
    return Translator(normalize_locale(req.headers.get("accept-language")))


def _err(code: int, message: str, detail=None, data=None):
    return {"code": int(code), "message": message, "message_detail": detail, "data": data}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BusinessError)
    async def _business_exc(req: Request, exc: BusinessError):
        message = _translator(req).get(exc.message_key, **exc.params)
        if exc.status_code >= 500:
            log.warning("%s %s failed: %s", req.method, req.url.path, message)
        return JSONResponse(status_code=exc.status_code, content=_err(exc.code, message))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        code = HTTP_STATUS_CODES.get(exc.status_code, ResultCode.FAILED)
        return JSONResponse(
            status_code=exc.status_code,
            content=_err(code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(req: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}"
            for e in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=_err(
                ResultCode.BAD_REQUEST,
                _translator(req).get("validation_error"),
                detail="; ".join(errors),
            ),
        )

    @app.exception_handler(Exception)
    async def _unhandled(req: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", req.method, req.url.path)
        # Avoid leaking internals
        return JSONResponse(
            status_code=500,
            content=_err(ResultCode.FAILED, _translator(req).get("internal_server_error")),
        )
