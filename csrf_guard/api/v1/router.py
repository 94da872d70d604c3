from fastapi import APIRouter

from ...config import settings
from ...routers import csrf as csrf_router


api_router = APIRouter(prefix="/api/v1")

api_router.include_router(csrf_router.router)


@api_router.get("/", tags=["csrf"])  # lightweight meta endpoint
def api_info():
    return {
        "name": "CSRF Guard API",
        "version": "v1",
        "docs": "/docs",
        "csrf": {
            "token": "/api/v1/csrf",
            "verify": "/api/v1/csrf/verify",
            "header": settings.CSRF_HEADER_NAME,
            "form_field": settings.CSRF_FORM_FIELD,
        },
    }
