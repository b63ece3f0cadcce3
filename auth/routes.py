# backend/auth/routes.py
from fastapi import APIRouter, Depends
from pymongo.database import Database
from typing import Optional

from config import Settings
from database.connection import get_db
from .controllers import admin_panel, login_with_password, logout_token
from .dependencies import admin_only, get_bearer_token, get_settings
from .models import UserLogin

router = APIRouter()

# ------------------------------------------------------------
# 🔹 Login
# ------------------------------------------------------------
@router.post("/login")
def login(data: UserLogin, db: Database = Depends(get_db), settings: Settings = Depends(get_settings)):
    return login_with_password(db, data, settings)

# ------------------------------------------------------------
# 🔹 Logout
# ------------------------------------------------------------
@router.post("/logout")
def logout(token: Optional[str] = Depends(get_bearer_token), db: Database = Depends(get_db)):
    return logout_token(db, token)

# ------------------------------------------------------------
# 🔹 Panel admin (sólo rol admin)
# ------------------------------------------------------------
@router.get("/admin")
def admin(user: dict = Depends(admin_only)):
    return admin_panel(user)
