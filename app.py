"""
users-api/app.py
Point d'entrée principal de l'API utilisateurs
"""

import argparse
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import Config
from api.errors import error_response, register_error_handlers
from api.users import router as users_router
from infrastructure.database.models import Base
from infrastructure.database.session import engine
from infrastructure.dependencies import get_db
from logging_config import setup_logging, setup_colored_logging

logger = logging.getLogger(__name__)


def configure_logging(config: Config):
    """Configure le logging selon la configuration"""
    log_file = config.log_file_path if config.log_file_enabled else None
    if config.log_colored:
        return setup_colored_logging(log_level=config.log_level, log_file=log_file)
    return setup_logging(log_level=config.log_level, log_file=log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestion du cycle de vie de l'application"""
    # --- Startup ---
    config: Config = app.state.config
    logger.info(f"🚀 Démarrage de {config.service_name}")
    logger.info(f"📊 Database: {engine.url.render_as_string(hide_password=True)}")

    # Sans base joignable au démarrage, le processus ne doit pas servir
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.critical(f"❌ Impossible de joindre la base de données: {e}")
        raise

    logger.info("✅ Tables de base de données prêtes")

    yield

    # --- Shutdown ---
    logger.info(f"🛑 Arrêt de {config.service_name}")
    engine.dispose()


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Construit l'application FastAPI"""
    config = config or Config()
    configure_logging(config)

    app = FastAPI(
        title="Users API",
        description="API de gestion des utilisateurs",
        version=config.version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(users_router, prefix="/users")

    @app.get("/", tags=["Root"])
    def root():
        """Page d'accueil de l'API"""
        return {
            "service": config.service_name,
            "version": config.version,
            "status": "operational",
            "documentation": "/docs"
        }

    @app.get("/health", tags=["System"])
    def health_check(db: Session = Depends(get_db)):
        """Endpoint de santé pour les orchestrateurs (Kubernetes, Docker, etc.)"""
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"❌ Health check failed: {e}")
            return error_response(HTTPStatus.SERVICE_UNAVAILABLE)
        return {
            "status": "healthy",
            "service": config.service_name,
            "database": "connected"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from logging_config import get_uvicorn_log_config

    config: Config = app.state.config

    parser = argparse.ArgumentParser(description="Users API server")
    parser.add_argument("--host", default=config.host, help="The address to listen on for HTTP requests.")
    parser.add_argument("--port", type=int, default=config.port, help="The port to listen on.")
    args = parser.parse_args()

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        timeout_keep_alive=config.request_timeout_seconds,
        log_config=get_uvicorn_log_config(log_level=config.log_level)
    )
