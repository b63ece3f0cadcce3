# backend/models/user.py
from pydantic import BaseModel
from typing import Literal, Optional

ADMIN = "admin"
USER = "user"


class User(BaseModel):
    id: Optional[str] = None
    username: str
    password: str  # hash bcrypt, nunca el texto plano
    role: Literal["admin", "user"] = USER
    created_at: Optional[str] = None
