"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from helpdesk.application.notifications import Notifier
from helpdesk.domain.entities import Identity
from helpdesk.domain.exceptions import InvalidCredentialsError
from helpdesk.infrastructure.realtime import RealtimeHub
from helpdesk.infrastructure.security import authenticate_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_identity(token: str = Depends(oauth2_scheme)) -> Identity:
    """Return the identity carried by the request's bearer token."""

    try:
        return authenticate_token(token)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido ou expirado",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_realtime_hub(request: Request) -> RealtimeHub:
    """Return the realtime components created by the application lifespan."""

    return request.app.state.realtime


def get_notifier(hub: RealtimeHub = Depends(get_realtime_hub)) -> Notifier:
    return Notifier(hub.dispatcher)
