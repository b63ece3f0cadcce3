# backend/database/connection.py
import logging
from typing import Optional

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from config import Settings

logger = logging.getLogger("database.connection")

SONGS = "songs"
USERS = "users"
REVOKED_TOKENS = "revokedtokens"


# ============================================================
# 🔧 CONSTRUCTOR DE URI
# ============================================================
def build_mongo_uri(settings: Settings) -> str:
    if settings.MONGO_URI:
        return settings.MONGO_URI
    host = f"{settings.MONGO_HOST}:{settings.MONGO_PORT}"
    if settings.MONGO_USER:
        return f"mongodb://{settings.MONGO_USER}:{settings.MONGO_PASSWORD}@{host}"
    return f"mongodb://{host}"


# ============================================================
# 🎵 CONEXIÓN A LA BASE DE DATOS
# ============================================================
def get_client(settings: Settings) -> MongoClient:
    """Crea el cliente Mongo. La conexión real se abre en la primera operación."""
    return MongoClient(build_mongo_uri(settings), tz_aware=True, connect=False)


def get_database(settings: Settings, client: Optional[MongoClient] = None) -> Database:
    client = client if client is not None else get_client(settings)
    db = client[settings.MONGO_DB]
    logger.info(f"✅ Base de datos seleccionada: {settings.MONGO_DB}")
    return db


# ============================================================
# 🚀 INICIALIZACIÓN DE ÍNDICES
# ============================================================
def init_db(db: Database) -> None:
    """Crea los índices que sostienen las invariantes del modelo."""
    try:
        db[USERS].create_index([("username", ASCENDING)], unique=True)
        db[REVOKED_TOKENS].create_index([("token", ASCENDING)], unique=True)
        # Mongo purga el token revocado cuando llega a su propio exp
        db[REVOKED_TOKENS].create_index([("expires_at", ASCENDING)], expireAfterSeconds=0)
        db[SONGS].create_index([("title", ASCENDING)])
        logger.info("✅ Índices creados correctamente.")
    except Exception as e:
        logger.error(f"❌ Error creando índices en MongoDB: {e}")
        raise


# ============================================================
# 🧩 DEPENDENCIA FASTAPI
# ============================================================
def get_db(request: Request) -> Database:
    """Devuelve la base registrada en app.state por create_app."""
    return request.app.state.db
