# backend/repositories/revoked_token_repository.py
from datetime import datetime, timezone
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
import logging

from database.connection import REVOKED_TOKENS

logger = logging.getLogger("repositories.revoked_tokens")


def revoke_token(db: Database, token: str, expires_at: datetime) -> bool:
    """
    Registra el token como revocado hasta expires_at (el exp del propio token).
    Devuelve False si ya estaba revocado. El índice TTL sobre expires_at
    hace que Mongo elimine el registro cuando el token ya no sería válido.
    """
    doc = {
        "token": token,
        "created_at": datetime.now(timezone.utc),
        "expires_at": expires_at,
    }
    try:
        db[REVOKED_TOKENS].insert_one(doc)
    except DuplicateKeyError:
        logger.info("ℹ️ Token ya revocado previamente.")
        return False
    logger.info(f"🔒 Token revocado hasta {expires_at.isoformat()}")
    return True


def is_token_revoked(db: Database, token: str) -> bool:
    return db[REVOKED_TOKENS].find_one({"token": token}, {"_id": 1}) is not None
