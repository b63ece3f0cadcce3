# backend/songs/routes.py
from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from auth.dependencies import admin_only
from database.connection import get_db
from models.song import SongPayload
from .controllers import (
    add_song,
    edit_song,
    fetch_all_songs,
    fetch_song_by_id,
    remove_song,
    search_songs,
)

router = APIRouter()

# ------------------------------------------------------------
# 🔹 Listar canciones
# ------------------------------------------------------------
@router.get("", summary="Obtener todas las canciones")
def list_songs(db: Database = Depends(get_db)):
    return fetch_all_songs(db)

# ------------------------------------------------------------
# 🔹 Buscar por título
# ------------------------------------------------------------
@router.get("/search", summary="Buscar canciones por título")
def search(q: str = Query("", description="Texto a buscar en el título"), db: Database = Depends(get_db)):
    return search_songs(db, q)

# ------------------------------------------------------------
# 🔹 Obtener canción por ID
# ------------------------------------------------------------
@router.get("/{song_id}", summary="Obtener canción por ID")
def get_song(song_id: str, db: Database = Depends(get_db)):
    return fetch_song_by_id(db, song_id)

# ------------------------------------------------------------
# 🔹 Crear canción (admin)
# ------------------------------------------------------------
@router.post("", status_code=201, summary="Agregar nueva canción", dependencies=[Depends(admin_only)])
def create(payload: SongPayload, db: Database = Depends(get_db)):
    return add_song(db, payload)

# ------------------------------------------------------------
# 🔹 Actualizar canción (admin)
# ------------------------------------------------------------
@router.put("/{song_id}", summary="Actualizar canción", dependencies=[Depends(admin_only)])
def update(song_id: str, payload: SongPayload, db: Database = Depends(get_db)):
    return edit_song(db, song_id, payload)

# ------------------------------------------------------------
# 🔹 Eliminar canción (admin)
# ------------------------------------------------------------
@router.delete("/{song_id}", summary="Eliminar canción", dependencies=[Depends(admin_only)])
def delete(song_id: str, db: Database = Depends(get_db)):
    return remove_song(db, song_id)
