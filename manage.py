"""
manage.py — Tareas de administración de SongBook
------------------------------------------------
Uso:
    python manage.py init-db
    python manage.py create-user alice s3cret --role admin
    python manage.py runserver --port 5000 --reload
"""

import argparse
import logging
import sys

from pymongo.errors import DuplicateKeyError

from auth.utils import hash_password
from config import Settings, settings as default_settings
from database.connection import get_database, init_db
from models.user import ADMIN, USER, User
from repositories.user_repository import create_user, get_user_by_username

logger = logging.getLogger("manage")


# =====================================================
# * Subcomandos
# =====================================================
def cmd_init_db(args, settings: Settings, db=None) -> int:
    db = db if db is not None else get_database(settings)
    init_db(db)
    print("✅ Índices creados.")
    return 0


def cmd_create_user(args, settings: Settings, db=None) -> int:
    db = db if db is not None else get_database(settings)
    init_db(db)
    if get_user_by_username(db, args.username):
        print(f"❌ El usuario '{args.username}' ya existe.")
        return 1
    user = User(username=args.username, password=hash_password(args.password), role=args.role)
    try:
        user_id = create_user(db, user)
    except DuplicateKeyError:
        print(f"❌ El usuario '{args.username}' ya existe.")
        return 1
    print(f"✅ Usuario '{args.username}' ({args.role}) creado con ID {user_id}")
    return 0


def cmd_runserver(args, settings: Settings, db=None) -> int:
    import uvicorn

    uvicorn.run("main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Administración de SongBook")
    sub = parser.add_subparsers(dest="command", required=True)

    p_init = sub.add_parser("init-db", help="Crear índices en MongoDB")
    p_init.set_defaults(func=cmd_init_db)

    p_user = sub.add_parser("create-user", help="Aprovisionar un usuario")
    p_user.add_argument("username")
    p_user.add_argument("password")
    p_user.add_argument("--role", choices=[ADMIN, USER], default=USER)
    p_user.set_defaults(func=cmd_create_user)

    p_run = sub.add_parser("runserver", help="Levantar la API con uvicorn")
    p_run.add_argument("--host", default="127.0.0.1")
    p_run.add_argument("--port", type=int, default=5000)
    p_run.add_argument("--reload", action="store_true")
    p_run.set_defaults(func=cmd_runserver)

    return parser


def main(argv=None, settings: Settings = None, db=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s - %(message)s")
    args = build_parser().parse_args(argv)
    return args.func(args, settings or default_settings, db)


if __name__ == "__main__":
    sys.exit(main())
