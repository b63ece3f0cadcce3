from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from config import Settings, settings as default_settings
from database.connection import get_client, get_database, init_db

# =====================================================
# * Importación de Routers principales
# =====================================================
from auth.routes import router as auth_router
from songs.routes import router as songs_router

# =====================================================
# * Configuración de Logging global
# =====================================================
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")


# =====================================================
# * Manejadores de error -> sobre {success, message}
# =====================================================
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"⚠️ Cuerpo inválido en {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"success": False, "message": "Invalid request body"})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Error no controlado en {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"success": False, "message": "Server error"})


# =====================================================
# * Ciclo de vida: índices al arrancar, cierre al parar
# =====================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.db)
    logger.info("✅ Base de datos inicializada correctamente y aplicación lista.")
    yield
    app.state.mongo_client.close()
    logger.info("👋 Conexión a MongoDB cerrada.")


# =====================================================
# * Inicialización de la aplicación
# =====================================================
def create_app(settings: Optional[Settings] = None, client: Optional[MongoClient] = None) -> FastAPI:
    settings = settings or default_settings
    client = client if client is not None else get_client(settings)

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} Backend",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.mongo_client = client
    app.state.db = get_database(settings, client)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =====================================================
    # * Registro de Rutas
    # =====================================================
    app.include_router(auth_router, tags=["Auth"])
    app.include_router(songs_router, prefix="/songs", tags=["Songs"])

    @app.get("/check", summary="Estado del servidor")
    def check():
        return {
            "success": True,
            "message": "Server is on...",
            "version": settings.VERSION,
            "env": settings.ENV,
        }

    # =====================================================
    # * Frontend estático
    # =====================================================
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

        @app.get("/", include_in_schema=False)
        def index():
            return FileResponse(static_dir / "index.html")
    else:
        logger.warning(f"⚠️ No se encontró el frontend en {static_dir}, sirviendo sólo la API")

    logger.info(f"🌍 {settings.PROJECT_NAME} backend iniciado en modo '{settings.ENV}'.")
    return app


app = create_app()
