# portfolio_api/routes/auth.py
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from portfolio_api.deps import get_credential_verifier, get_current_principal
from portfolio_api.errors import UnauthorizedError
from portfolio_api.security import CredentialVerifier, Principal, create_access_token

log = logging.getLogger("routes.auth")

router = APIRouter(prefix="/auth", tags=["Auth (JWT)"])


class LoginPayload(BaseModel):
    username: str = Field(min_length=1, max_length=128)
    password: str = Field(min_length=1, max_length=128)


class LoginResponse(BaseModel):
    success: bool
    token: str
    user: Principal


@router.post("/login", response_model=LoginResponse)
def login(body: LoginPayload, verifier: CredentialVerifier = Depends(get_credential_verifier)):
    principal = verifier.authenticate(body.username, body.password)
    if principal is None:
        log.info("Failed login for %r", body.username)
        raise UnauthorizedError("Invalid credentials")
    token = create_access_token(principal)
    log.info("Issued token for %s", principal.name)
    return {"success": True, "token": token, "user": principal}


@router.get("/me", response_model=Principal)
def me(principal: Principal = Depends(get_current_principal)):
    return principal
