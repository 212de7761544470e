"""Account API: registration and login"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from chatroom.utils.exceptions import AuthenticationError, ConflictError, ValidationError
from chatroom.utils.logger import get_logger

from .models import CredentialsRequest, ErrorResponse, StatusResponse, TokenResponse
from .services import ChatServices, get_services

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=f"Error {status_code} | {message}").model_dump(),
    )


async def _read_credentials(request: Request) -> CredentialsRequest:
    # The browser client posts JSON without a Content-Type header
    return CredentialsRequest.model_validate_json(await request.body())


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: Request, services: ChatServices = Depends(get_services)):
    """Create an account. 400 for blank fields or a taken login, 500 otherwise."""
    try:
        credentials = await _read_credentials(request)
        account = await run_in_threadpool(
            services.accounts.create, credentials.login, credentials.password
        )
    except (ValidationError, ConflictError) as e:
        logger.info("Registration rejected", error=str(e))
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.exception("Registration error", error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    logger.info("User registered", login=account.login, user_id=account.id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=StatusResponse().model_dump(),
    )


@router.post("/login")
async def login(request: Request, services: ChatServices = Depends(get_services)):
    """Verify credentials and mint a session token"""
    try:
        credentials = await _read_credentials(request)
    except ValueError:
        logger.warning("Login rejected: malformed body")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    try:
        identity = await run_in_threadpool(
            services.accounts.verify, credentials.login, credentials.password
        )
    except AuthenticationError as e:
        logger.warning("Login failed", login=credentials.login)
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    token = services.registry.issue(identity)
    logger.info("Login successful", login=identity.login, user_id=identity.user_id)
    return JSONResponse(content=TokenResponse(token=token).model_dump())
