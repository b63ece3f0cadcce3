# backend/repositories/song_repository.py
from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime, timezone
from pymongo import ReturnDocument
from pymongo.database import Database
from typing import List, Dict, Optional
import logging
import re

from database.connection import SONGS

logger = logging.getLogger("repositories.songs")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_object_id(song_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(song_id)
    except (InvalidId, TypeError):
        logger.warning(f"⚠️ ID de canción inválido: {song_id}")
        return None


# ============================================================
# 🔹 Serializador de canción
# ============================================================
def serialize_song(doc: dict) -> Optional[Dict]:
    """Convierte un documento Mongo en un dict JSON serializable."""
    if not doc:
        return None
    song = dict(doc)
    song["_id"] = str(song["_id"])
    return song


# ============================================================
# 🔹 Listar / buscar
# ============================================================
def get_all_songs(db: Database) -> List[Dict]:
    return [serialize_song(doc) for doc in db[SONGS].find({})]


def search_songs_by_title(db: Database, query: str) -> List[Dict]:
    """Coincidencia por subcadena, sin distinguir mayúsculas, sólo en el título."""
    pattern = re.escape(query or "")
    cursor = db[SONGS].find({"title": {"$regex": pattern, "$options": "i"}})
    return [serialize_song(doc) for doc in cursor]


def get_song_by_id(db: Database, song_id: str) -> Optional[Dict]:
    obj_id = _to_object_id(song_id)
    if obj_id is None:
        return None
    return serialize_song(db[SONGS].find_one({"_id": obj_id}))


# ============================================================
# 🔹 Crear / actualizar / eliminar
# ============================================================
def create_song(db: Database, fields: dict) -> Dict:
    created_at = _now()
    doc = dict(fields)
    doc.update({"created_at": created_at, "updated_at": created_at})
    result = db[SONGS].insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info(f"✅ Canción creada con ID {result.inserted_id}")
    return serialize_song(doc)


def update_song(db: Database, song_id: str, fields: dict) -> Optional[Dict]:
    """Sobrescribe sólo los campos recibidos. Devuelve None si el ID no existe."""
    obj_id = _to_object_id(song_id)
    if obj_id is None:
        return None
    changes = dict(fields)
    changes["updated_at"] = _now()
    doc = db[SONGS].find_one_and_update(
        {"_id": obj_id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if doc:
        logger.info(f"✅ Canción actualizada: {song_id}")
    return serialize_song(doc)


def delete_song(db: Database, song_id: str) -> bool:
    """Elimina una canción por su ID. Devuelve True si se eliminó."""
    obj_id = _to_object_id(song_id)
    if obj_id is None:
        return False
    result = db[SONGS].delete_one({"_id": obj_id})
    if result.deleted_count > 0:
        logger.info(f"✅ Canción eliminada con ID {song_id}")
        return True
    logger.warning(f"⚠️ Canción no encontrada para eliminar: {song_id}")
    return False
