"""Endpoint that issues bearer tokens."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from helpdesk.application.use_cases.users import AuthenticationStatus, authenticate_user
from helpdesk.domain.entities import Identity
from helpdesk.infrastructure.database import get_db
from helpdesk.infrastructure.security import create_identity_token
from helpdesk.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


# Nota: mantém-se a assinatura esperada por OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Autentica o utilizador pelo email e devolve um token JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais incorretas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Utilizador inativo",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = Identity(id=user.id, role=user.role)
    logger.info("User %s authenticated", user.id)
    return Token(
        access_token=create_identity_token(identity),
        user_id=user.id,
        role=user.role,
    )
