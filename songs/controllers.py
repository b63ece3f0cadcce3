# backend/songs/controllers.py
from fastapi import HTTPException
from pymongo.database import Database
import logging

from models.song import SongPayload
from repositories.song_repository import (
    create_song,
    delete_song,
    get_all_songs,
    get_song_by_id,
    search_songs_by_title,
    update_song,
)

logger = logging.getLogger("songs.controllers")


def _require_fields(payload: SongPayload):
    if not payload.has_required_fields():
        raise HTTPException(status_code=400, detail="Required fields missing")


# ============================================================
# 🔹 Listar / buscar / obtener
# ============================================================
def fetch_all_songs(db: Database):
    try:
        return {"success": True, "data": get_all_songs(db)}
    except Exception:
        logger.exception("❌ Error listando canciones.")
        raise HTTPException(status_code=500, detail="Server error")


def search_songs(db: Database, query: str):
    try:
        songs = search_songs_by_title(db, query)
    except Exception:
        logger.exception(f"❌ Error buscando canciones con q={query!r}")
        raise HTTPException(status_code=500, detail="Error searching songs")
    logger.info(f"🔎 Búsqueda {query!r}: {len(songs)} resultados")
    return {"success": True, "data": songs}


def fetch_song_by_id(db: Database, song_id: str):
    try:
        return {"success": True, "data": get_song_by_id(db, song_id)}
    except Exception:
        logger.exception(f"❌ Error obteniendo canción {song_id}")
        raise HTTPException(status_code=500, detail="Server error")


# ============================================================
# 🔹 Crear / actualizar / eliminar
# ============================================================
def add_song(db: Database, payload: SongPayload):
    _require_fields(payload)
    try:
        song = create_song(db, payload.model_dump())
    except Exception:
        logger.exception("❌ Error creando canción.")
        raise HTTPException(status_code=500, detail="Error while creating new song")
    return {"success": True, "data": song}


def edit_song(db: Database, song_id: str, payload: SongPayload):
    _require_fields(payload)
    try:
        song = update_song(db, song_id, payload.model_dump(exclude_unset=True))
    except Exception:
        logger.exception(f"❌ Error actualizando canción {song_id}")
        raise HTTPException(status_code=500, detail="Error while updating song")
    if song is None:
        raise HTTPException(status_code=404, detail="Song not found")
    return {"success": True, "data": song}


def remove_song(db: Database, song_id: str):
    try:
        deleted = delete_song(db, song_id)
    except Exception:
        logger.exception(f"❌ Error eliminando canción {song_id}")
        raise HTTPException(status_code=500, detail="Error while deleting song")
    if not deleted:
        raise HTTPException(status_code=404, detail="Song not found")
    return {"success": True, "message": "Song deleted"}
