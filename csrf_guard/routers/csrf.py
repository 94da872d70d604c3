# csrf_guard/routers/csrf.py
# PURPOSE: JSON endpoints for SPA/fetch clients: /csrf (issue), /csrf/verify (report)

from fastapi import APIRouter, Depends, Request, Response

from ..models import CsrfTokenResponse, CsrfVerifyResponse
from ..security import csrf_verdict, get_csrf_secret, issue_csrf_token

router = APIRouter(prefix="/csrf", tags=["csrf"])


@router.get("", response_model=CsrfTokenResponse)
def get_csrf_token(request: Request, response: Response, secret: str = Depends(get_csrf_secret)):
    # Existing valid cookie is kept; a new one is only set when needed
    token = issue_csrf_token(request, response, secret)
    return CsrfTokenResponse(csrf_token=token.csrf_token)


@router.post("/verify", response_model=CsrfVerifyResponse)
def verify_csrf(valid: bool = Depends(csrf_verdict)):
    # Reports the verdict only; rejecting is up to the caller
    return CsrfVerifyResponse(valid=valid)
