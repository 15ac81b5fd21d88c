"""
Form step submission routes
"""
from http import HTTPStatus

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from formwizard.core.logging_config import LoggingConfig
from formwizard.core.metrics import form_navigation_total
from formwizard.core.templates import TemplateRenderer, get_renderer
from formwizard.services.form_navigation import (HX_REDIRECT_HEADER,
                                                 BadRequest, InlineRedirect,
                                                 Outcome, Redirect, Render,
                                                 RequestMode, dispatch,
                                                 parse_action, parse_step)

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["forms"])


def _plain_status(status: HTTPStatus) -> PlainTextResponse:
    return PlainTextResponse(status.phrase, status_code=status)


def to_response(outcome: Outcome, request: Request, renderer: TemplateRenderer) -> Response:
    """Turn a navigation outcome into the HTTP response"""
    if isinstance(outcome, Render):
        return renderer.render(request, outcome.view, outcome.data, status_code=outcome.status_code)
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.path, status_code=outcome.status_code)
    if isinstance(outcome, InlineRedirect):
        return Response(status_code=outcome.status_code, headers={HX_REDIRECT_HEADER: outcome.path})
    if isinstance(outcome, BadRequest):
        return _plain_status(HTTPStatus(outcome.status_code))
    raise TypeError(f"Unhandled navigation outcome: {outcome!r}")


@router.post("/form/{section}")
async def submit_form_step(
    section: str,
    request: Request,
    renderer: TemplateRenderer = Depends(get_renderer),
):
    """
    Move between form steps

    Boosted htmx requests (HX-Request and HX-Boosted both "true") get the next
    step's fragment, or an HX-Redirect header when leaving the form. Other
    requests get a 303 redirect.
    """
    step = parse_step(section)
    if step is None:
        return _plain_status(HTTPStatus.NOT_FOUND)

    form = await request.form()
    action = parse_action(step, form)
    mode = RequestMode.from_headers(request.headers)
    outcome = dispatch(step, action, mode)

    form_navigation_total.labels(
        step=step.value,
        action=action.value if action is not None else "none",
        outcome=outcome.kind,
    ).inc()

    if isinstance(outcome, BadRequest):
        logger.warning(
            "Unrecognized form action",
            extra={"step": step.value, "fields": sorted(form.keys())}
        )

    return to_response(outcome, request, renderer)
