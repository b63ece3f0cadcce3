# backend/auth/controllers.py
from fastapi import HTTPException
from pymongo.database import Database
from typing import Optional
import logging

from config import Settings
from repositories.revoked_token_repository import revoke_token
from repositories.user_repository import get_user_credentials
from .models import UserLogin
from .utils import create_access_token, decode_unverified, token_expiry, verify_password

logger = logging.getLogger("auth.controllers")


# =====================================================
# 🔹 Login con password
# =====================================================
def login_with_password(db: Database, data: UserLogin, settings: Settings):
    try:
        user = get_user_credentials(db, data.username)
    except Exception:
        logger.exception(f"❌ Error buscando usuario {data.username}")
        raise HTTPException(status_code=500, detail="Login failed")

    if not user or not verify_password(data.password, user.get("password")):
        logger.warning(f"⚠️ Credenciales inválidas para {data.username!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(
        {"userId": str(user["_id"]), "role": user.get("role", "user")}, settings
    )
    logger.info(f"✅ Login correcto -> {data.username}")
    return {"success": True, "token": token}


# =====================================================
# 🔹 Logout (revoca el token recibido)
# =====================================================
def logout_token(db: Database, token: Optional[str]):
    if not token:
        raise HTTPException(status_code=404, detail="No token provided")

    expires_at = token_expiry(decode_unverified(token))
    if expires_at is not None:
        try:
            revoke_token(db, token, expires_at)
        except Exception:
            logger.exception("❌ Error revocando token")
            raise HTTPException(status_code=500, detail="Logout failed")
    else:
        logger.warning("⚠️ Logout con token sin exp legible; no se registra.")

    return {"success": True, "message": "Logged out successfully"}


# =====================================================
# 🔹 Panel de administración
# =====================================================
def admin_panel(user: dict):
    logger.info(f"🛡️ Acceso al panel de administración: {user.get('userId')}")
    return {"success": True, "message": "Welcome to admin panel"}
