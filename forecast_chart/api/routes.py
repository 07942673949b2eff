from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from forecast_chart.web.page import render_page

router = APIRouter(tags=["default"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> HTMLResponse:
    return HTMLResponse(render_page())
