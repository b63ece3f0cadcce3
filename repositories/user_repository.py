# backend/repositories/user_repository.py
from datetime import datetime, timezone
from pymongo.database import Database
from typing import Optional
import logging

from database.connection import USERS
from models.user import User

logger = logging.getLogger("repositories.users")


# ------------------------------------------------------------
# 🔹 Serialización segura de usuario
# ------------------------------------------------------------
def serialize_user(user: dict) -> Optional[dict]:
    """Convierte ObjectId a str y limpia campos no serializables."""
    if not user:
        return None
    user_copy = dict(user)
    user_copy["id"] = str(user_copy["_id"])
    user_copy.pop("_id", None)
    user_copy.pop("password", None)  # nunca exponer password
    return user_copy


# ------------------------------------------------------------
# 🔹 Crear usuario (aprovisionamiento fuera de la API)
# ------------------------------------------------------------
def create_user(db: Database, user: User) -> str:
    user_dict = user.model_dump(exclude={"id"})
    user_dict["created_at"] = datetime.now(timezone.utc).isoformat()
    result = db[USERS].insert_one(user_dict)
    logger.info(f"✅ Usuario creado con ID {result.inserted_id}")
    return str(result.inserted_id)


# ------------------------------------------------------------
# 🔹 Obtener usuario por username
# ------------------------------------------------------------
def get_user_by_username(db: Database, username: str) -> Optional[dict]:
    return serialize_user(db[USERS].find_one({"username": username}))


def get_user_credentials(db: Database, username: str) -> Optional[dict]:
    """Documento completo, con el hash, sólo para comparar en el login."""
    if not username:
        return None
    return db[USERS].find_one({"username": username})
