# backend/models/song.py
from pydantic import BaseModel, ConfigDict
from typing import Optional


class SongPayload(BaseModel):
    """Cuerpo de POST/PUT /songs. title y author se validan en el controlador."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    author: Optional[str] = None
    length: Optional[float] = None  # duración en segundos
    cover: Optional[str] = None     # URL de la portada

    def has_required_fields(self) -> bool:
        return bool(self.title) and bool(self.author)
