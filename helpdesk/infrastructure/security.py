"""Security helpers for hashing and token handling."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from helpdesk.config import get_settings
from helpdesk.domain.entities import ROLES, Identity
from helpdesk.domain.exceptions import InvalidCredentialsError

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def create_identity_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    """Issue a bearer token carrying ``identity``."""

    return create_access_token(
        {"sub": str(identity.id), "role": identity.role}, expires_delta=expires_delta
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def authenticate_token(token: str | None) -> Identity:
    """Resolve the :class:`Identity` carried by ``token``.

    This is the single verification rule for bearer credentials: REST
    requests and websocket handshakes both go through it. It only checks the
    signature, the expiry and the claim shape, so it never touches the
    database.
    """

    if not token:
        raise InvalidCredentialsError("Missing credential")

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise InvalidCredentialsError(str(exc)) from exc

    if "exp" not in payload:
        raise InvalidCredentialsError("Credential without expiry")

    subject = payload.get("sub")
    role = payload.get("role")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise InvalidCredentialsError("Malformed subject claim") from exc
    if user_id <= 0 or not isinstance(role, str) or role.upper() not in ROLES:
        raise InvalidCredentialsError("Malformed credential claims")

    return Identity(id=user_id, role=role.upper())
