from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from bookshelf.core.rate_limiter import rate_limit_ip
from bookshelf.services.auth_service import AuthService, RegistrationError

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    username: str
    password: str


def _get_auth_service(request: Request) -> AuthService:
    svc = getattr(getattr(request.app, "state", None), "auth_service", None)
    if not svc:
        raise RuntimeError("AuthService not configured")
    return svc


@router.post("/register")
def register(request: Request, payload: RegisterRequest):
    settings = request.app.state.settings
    rate_limit_ip(
        request,
        "auth:register",
        limit=settings.register_rate_limit,
        window_seconds=settings.register_rate_window,
        trust_forwarded=settings.trust_proxy_headers,
    )
    try:
        result = _get_auth_service(request).register(payload.username, payload.password)
    except RegistrationError as exc:
        raise HTTPException(400, exc.message)
    return JSONResponse({"username": result.username}, status_code=201)
