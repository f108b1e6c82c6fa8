"""Local HTTP server answering slash-command POSTs."""

from __future__ import annotations

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from igor.framework import IgorFramework
from igor.logging_utils import request_context
from igor.transport import answer_form

REQUEST_ID_HEADER = "X-Request-Id"


def create_app(framework: IgorFramework) -> FastAPI:
    """Build the ASGI app that serves one framework."""

    app = FastAPI(title="Igor", docs_url=None, redoc_url=None, openapi_url=None)

    @app.post("/")
    async def slash_command(request: Request) -> JSONResponse:
        body = (await request.body()).decode("utf-8", errors="replace")
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        with request_context(request_id):
            logger.info("server.request request_id={}", request_id)
            payload = await answer_form(framework, body)
        return JSONResponse(payload)

    return app
