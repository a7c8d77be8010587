"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import ConflictError, InvalidCredentialsError, UnauthenticatedError
from src.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    user_id: int
    username: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, username: str, issued_at: datetime | None = None) -> str:
    """Create a JWT access token valid for the configured window from ``issued_at``."""
    # Claims carry whole seconds; iat and exp must describe the same window
    issued_at = (issued_at or datetime.now(UTC)).replace(microsecond=0)
    expire = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    # jose accepts a token during the second its exp falls in; expiry is exclusive here
    if payload.get("exp") is None or payload["exp"] <= datetime.now(UTC).timestamp():
        return None
    return payload


def verify_access_token(token: str | None) -> TokenClaims:
    """Verify a bearer token and return the identity it carries.

    Raises:
        UnauthenticatedError: token missing, malformed, expired or badly signed
    """
    if not token:
        raise UnauthenticatedError("Access token required")

    payload = decode_access_token(token)
    if payload is None:
        raise UnauthenticatedError("Invalid or expired token")

    user_id = payload.get("sub")
    username = payload.get("username")
    if user_id is None or username is None:
        raise UnauthenticatedError("Invalid or expired token")

    try:
        return TokenClaims(user_id=int(user_id), username=username)
    except ValueError:
        raise UnauthenticatedError("Invalid or expired token") from None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user.

    Raises:
        ConflictError: the username or email is already registered
    """
    existing = (
        db.query(User).filter(or_(User.email == email, User.username == username)).first()
    )
    if existing:
        raise ConflictError("User already exists")

    user = User(username=username, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same username or email
        db.rollback()
        raise ConflictError("User already exists") from None
    db.refresh(user)

    logger.info(f"Created user {user.id} ({user.username})")
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
    """
    user = get_user_by_email(db, email)
    if not user:
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user
