# backend/auth/utils.py
import jwt
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import Settings


# =====================================================
# 🔹 Hashing
# =====================================================
def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # hash mal formado en la base
        return False


# =====================================================
# 🔹 Tokens
# =====================================================
def create_access_token(data: dict, settings: Settings, expires_minutes: Optional[int] = None) -> str:
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({"iat": now, "exp": now + timedelta(minutes=minutes)})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Optional[dict]:
    """Verifica firma y expiración. Devuelve None si el token no es válido."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def decode_unverified(token: str) -> Optional[dict]:
    """Lee los claims sin verificar la firma (usado en el logout)."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return None


def token_expiry(claims: Optional[dict]) -> Optional[datetime]:
    exp = (claims or {}).get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(exp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        # exp fuera del rango representable
        return None
