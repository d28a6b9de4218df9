from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api import get_chart_service, http_error_for
from services.chart_service import ChartService
from services.errors import ChartError

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

router = APIRouter(include_in_schema=False)


@router.get("/", name="chart_page", response_class=HTMLResponse)
async def chart_page(
    request: Request,
    service: ChartService = Depends(get_chart_service),
) -> HTMLResponse:
    try:
        svg = await service.render_source()
    except ChartError as exc:
        raise http_error_for(exc) from exc
    return templates.TemplateResponse(
        request,
        "chart.html",
        {
            "svg": svg,
            "source": service.default_source,
        },
    )
