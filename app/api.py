"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.schemas import ChartSummary
from services.chart_service import ChartService, build_default_chart_service
from services.errors import ChartError, EmptyInputError, LoadError, ParseError, SourceNotFoundError
from services.loader import is_remote

SVG_MEDIA_TYPE = "image/svg+xml"

router = APIRouter()


def get_chart_service() -> ChartService:
    return build_default_chart_service()


async def _read_upload(file: UploadFile) -> str:
    contents = await file.read()
    await file.close()
    if not contents:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )
    try:
        return contents.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is not valid UTF-8 text.",
        ) from exc


def http_error_for(exc: ChartError) -> HTTPException:
    if isinstance(exc, SourceNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, LoadError):
        remote = bool(exc.source) and is_remote(exc.source)
        code = status.HTTP_502_BAD_GATEWAY if remote else status.HTTP_500_INTERNAL_SERVER_ERROR
        return HTTPException(status_code=code, detail=str(exc))
    if isinstance(exc, (ParseError, EmptyInputError)):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get(
    "/chart.svg",
    summary="Render the configured price data as an SVG line chart.",
    response_class=Response,
)
async def default_chart(
    service: ChartService = Depends(get_chart_service),
) -> Response:
    try:
        svg = await service.render_source()
    except ChartError as exc:
        raise http_error_for(exc) from exc
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)


@router.post(
    "/charts",
    summary="Render an uploaded TSV file as an SVG line chart.",
    response_class=Response,
)
async def render_upload(
    file: UploadFile = File(..., description="TSV file with date and close columns."),
    service: ChartService = Depends(get_chart_service),
) -> Response:
    text = await _read_upload(file)
    try:
        svg = await run_in_threadpool(
            service.render_text, text, source=file.filename or "<upload>"
        )
    except ChartError as exc:
        raise http_error_for(exc) from exc
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)


@router.post(
    "/charts/summary",
    response_model=ChartSummary,
    summary="Compute domains, ticks and coordinates for an uploaded TSV file.",
)
async def summarize_upload(
    file: UploadFile = File(..., description="TSV file with date and close columns."),
    service: ChartService = Depends(get_chart_service),
) -> ChartSummary:
    text = await _read_upload(file)
    try:
        layout = await run_in_threadpool(
            service.summarize_text, text, source=file.filename or "<upload>"
        )
    except ChartError as exc:
        raise http_error_for(exc) from exc
    return ChartSummary.from_layout(layout)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
