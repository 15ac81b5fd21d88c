"""
Page routes for web interface
"""
from http import HTTPStatus

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from formwizard.core.templates import TemplateRenderer, get_renderer
from formwizard.services.form_navigation import parse_step

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, renderer: TemplateRenderer = Depends(get_renderer)):
    """Landing page"""
    return renderer.render(request, "home")


# Registered before /form/{section} so "submitted" is not taken for a step
@router.get("/form/submitted", response_class=HTMLResponse)
async def form_submitted(request: Request, renderer: TemplateRenderer = Depends(get_renderer)):
    """Confirmation page shown after step three is submitted"""
    return renderer.render(request, "form-submitted")


@router.get("/form/{section}", response_class=HTMLResponse)
async def form_page(
    section: str,
    request: Request,
    renderer: TemplateRenderer = Depends(get_renderer),
):
    """
    Full page for a form step

    Any step may be opened directly; there is no record of earlier steps.
    """
    step = parse_step(section)
    if step is None:
        return PlainTextResponse(HTTPStatus.NOT_FOUND.phrase, status_code=HTTPStatus.NOT_FOUND)
    return renderer.render(request, f"page-form-{step.value}", {"step": step.value})
