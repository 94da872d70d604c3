from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from importlib import resources as ilres

from ..config import settings
from ..security import ensure_csrf, get_csrf_secret, issue_csrf_token

templates_dir = ilres.files("csrf_guard").joinpath("templates")
templates = Jinja2Templates(directory=str(templates_dir))


router = APIRouter(tags=["web"])


def _render_form(
    request: Request, response: Response, secret: str, message: Optional[str] = None
) -> str:
    """Render the demo form with the token in a hidden field and meta tag.

    The cookie lands on the injected ``response``; FastAPI copies its headers
    onto the HTMLResponse built from the returned markup.
    """
    token = issue_csrf_token(request, response, secret)
    return templates.get_template("form.html").render(
        message=message,
        csrf_field=settings.CSRF_FORM_FIELD,
        csrf_header=settings.CSRF_HEADER_NAME,
        csrf_token=token.csrf_token,
    )


@router.get("/form", response_class=HTMLResponse)
def form_page(request: Request, response: Response, secret: str = Depends(get_csrf_secret)):
    return _render_form(request, response, secret)


@router.post("/form", response_class=HTMLResponse)
def form_submit(
    request: Request,
    response: Response,
    message: str = Form(""),
    secret: str = Depends(get_csrf_secret),
    _csrf=Depends(ensure_csrf),
):
    # CSRF passed; echo the message back
    return _render_form(request, response, secret, message=(message or "").strip() or None)
