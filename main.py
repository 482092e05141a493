# main.py
"""
Portal de Contas - Aplicação FastAPI Principal

Gestão de usuários e perfis com autenticação centralizada via JWT,
recuperação de senha por email e mensagens internacionalizadas.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth.router import router as auth_router
from config import ENV
from database.init_db import init_database
from middleware.locale import LocaleMiddleware
from middleware.request_id import RequestIDMiddleware
from roles.router import router as roles_router
from users.router import router as users_router
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle events da aplicação.
    Executa na inicialização e no shutdown.
    """
    setup_logging()
    logger.info("Iniciando Portal de Contas", env=ENV)
    init_database()
    yield
    logger.info("Encerrando Portal de Contas")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """
    Cria a aplicação FastAPI.

    Testes usam use_lifespan=False para não tocar no banco configurado.
    """
    app = FastAPI(
        title="Portal de Contas",
        description="Gestão de usuários, perfis e autenticação",
        version="1.0.0",
        lifespan=lifespan if use_lifespan else None,
    )

    # Configuração de CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LocaleMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    async def health_check():
        """Health check para monitoramento"""
        return {"status": "ok", "service": "portal-contas", "env": ENV}

    # ==================================================
    # ROUTERS
    # ==================================================
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(roles_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=ENV == "development")
