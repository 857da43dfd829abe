from fastapi import APIRouter
from pydantic import BaseModel, Field

from uigen.core.modules.auth.models import AuthResult
from uigen.core.modules.session.models import SessionView
from uigen.web.deps import AppDep, SessionDep
from uigen.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Email and password submitted by the sign-in and sign-up forms."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Account password")

    model_config = {"json_schema_extra": {"examples": [{"email": "ada@example.com", "password": "correct-horse"}]}}


@router.post(
    "/auth/sign-up",
    summary="Create account",
    description=(
        "Register a new account and set the auth-token cookie. "
        "Rejected input is reported in the body with success=false, not as an HTTP error."
    ),
    operation_id="signUp",
    responses={200: {"description": "Registration outcome"}},
)
async def sign_up(req: CredentialsRequest, app: AppDep) -> AuthResult:
    return await app.sign_up(req.email, req.password)


@router.post(
    "/auth/sign-in",
    summary="Sign in",
    description=(
        "Check credentials and set the auth-token cookie. "
        "Invalid credentials are reported in the body with success=false, not as an HTTP error."
    ),
    operation_id="signIn",
    responses={200: {"description": "Sign-in outcome"}},
)
async def sign_in(req: CredentialsRequest, app: AppDep) -> AuthResult:
    return await app.sign_in(req.email, req.password)


@router.post(
    "/auth/sign-out",
    summary="Sign out",
    description="Remove the auth-token cookie. Safe to call without a session.",
    operation_id="signOut",
    status_code=204,
    responses={204: {"description": "Cookie removed"}},
)
async def sign_out(app: AppDep) -> None:
    await app.sign_out()


@router.get(
    "/auth/session",
    summary="Current session",
    description="Decode the auth-token cookie of this request.",
    operation_id="getSession",
    responses={
        200: {"description": "Session is valid"},
        401: {"model": ErrorResponse, "description": "No valid session"},
    },
)
async def get_session(session: SessionDep) -> SessionView:
    return SessionView.from_domain(session)
