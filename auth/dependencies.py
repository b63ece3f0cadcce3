# backend/auth/dependencies.py
from fastapi import Depends, Header, HTTPException, Request
from pymongo.database import Database
from typing import Optional
import logging

from config import Settings
from database.connection import get_db
from models.user import ADMIN
from repositories.revoked_token_repository import is_token_revoked
from .utils import decode_access_token

logger = logging.getLogger("auth.dependencies")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# =====================================================
# 🔹 Extraer token del header Authorization
# =====================================================
def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


# =====================================================
# 🔐 Puerta de autenticación
# =====================================================
def authenticate_token(
    request: Request,
    token: Optional[str] = Depends(get_bearer_token),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        revoked = is_token_revoked(db, token)
    except Exception:
        logger.exception("❌ Error consultando tokens revocados")
        raise HTTPException(status_code=500, detail="Authentication failed")

    if revoked:
        logger.warning("⚠️ Intento de uso de token revocado")
        raise HTTPException(status_code=401, detail="Token revoked")

    claims = decode_access_token(token, settings)
    if claims is None:
        raise HTTPException(status_code=403, detail="Invalid token")

    request.state.user = claims
    return claims


# =====================================================
# 🛡️ Puerta de rol
# =====================================================
def require_role(role: str):
    def role_gate(user: dict = Depends(authenticate_token)) -> dict:
        if user.get("role") != role:
            logger.warning(f"⚠️ Acceso denegado a {user.get('userId')}: rol {user.get('role')!r}")
            raise HTTPException(status_code=403, detail=f"{role.capitalize()} access required")
        return user

    return role_gate


admin_only = require_role(ADMIN)
