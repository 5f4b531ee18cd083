"""FastAPI application exposing the handler registry over HTTP.

WHY: Tools that cannot shell out to the CLI (web front-ends, n8n, curl
scripts) need the same conversions over HTTP.

HOW: The registry is built once in the app lifespan and stored on
``app.state``. POST /conversions takes a multipart file plus the two
format ids, resolves a handler, converts the single file and streams
the result back with the target MIME type.

RULES:
- Unsupported pairs return 400; undecodable or oversized input 422
- The output file name is sent in Content-Disposition, percent-encoded
  in filename* with an ASCII fallback in filename
- GET /formats lists every descriptor with its owning handler
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, List
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response

from format_hub import __version__
from format_hub.handlers import HandlerRegistry
from format_hub.handlers.base import (
    ConversionError,
    FileData,
    UnsupportedConversionError,
)
from format_hub.server.models import ErrorResponse, FormatInfo, HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize every handler before the first request."""
    app.state.registry = await HandlerRegistry.create()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Format Hub API",
    description=(
        "Convert files between formats using pluggable handlers "
        "(XCC and SRT subtitles, text archives). Upload a file with "
        "its source and target format ids and receive the converted file."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    response_model_by_alias=True,
    tags=["formats"],
    summary="List supported formats",
)
async def list_formats(request: Request) -> List[FormatInfo]:
    registry: HandlerRegistry = request.app.state.registry
    return [
        FormatInfo(
            handler=handler.name,
            name=f.name,
            format=f.format,
            extension=f.extension,
            mime=f.mime,
            from_=f.from_,
            to=f.to,
            internal=f.internal,
        )
        for handler, f in registry.formats()
    ]


@app.post(
    "/conversions",
    tags=["conversions"],
    summary="Convert one file",
    responses={
        200: {"description": "The converted file."},
        400: {"model": ErrorResponse, "description": "Unsupported format pair."},
        422: {"model": ErrorResponse, "description": "Input could not be converted."},
    },
)
async def create_conversion(
    request: Request,
    file: Annotated[UploadFile, File(description="File to convert.")],
    input_format: Annotated[str, Form(description="Source format internal id, e.g. 'xcc'.")],
    output_format: Annotated[str, Form(description="Target format internal id, e.g. 'srt'.")],
) -> Response:
    registry: HandlerRegistry = request.app.state.registry
    try:
        handler, source, target = registry.resolve(input_format, output_format)
    except UnsupportedConversionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    data = FileData(name=file.filename or "upload.{}".format(source.extension), bytes=await file.read())
    try:
        outputs = await handler.do_convert([data], source, target)
    except UnsupportedConversionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ConversionError as exc:
        logger.warning("Conversion of %s failed: %s", data.name, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    output = outputs[0]
    return Response(
        content=output.bytes,
        media_type=target.mime,
        headers={"Content-Disposition": _content_disposition(output.name)},
    )


def _content_disposition(filename: str) -> str:
    """Build an attachment header safe for any file name.

    Header values must be latin-1, so the real name travels in the RFC 5987
    ``filename*`` parameter and ``filename`` carries an ASCII fallback.
    """
    fallback = "".join(
        c if 32 <= ord(c) < 127 and c not in "\"\\" else "_" for c in filename
    )
    return "attachment; filename=\"{}\"; filename*=UTF-8''{}".format(
        fallback, quote(filename, safe=""),
    )


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the format-hub-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
