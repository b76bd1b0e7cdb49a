from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
import logging
import time

from ibge_api.config.settings import Settings, get_settings
from ibge_api.database.connection import Database
from ibge_api.middleware.error_handler import setup_error_handlers
from ibge_api.routers import auth_router, locations_router
from ibge_api.services.password_hasher import PasswordHasher
from ibge_api.services.token_service import TokenService

# Configurar logger
logger = logging.getLogger("ibge_api.main")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Monta a aplicação FastAPI.

    Cada componente recebe o que precisa das configurações aqui; nenhum
    deles lê estado global durante as requisições.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings)
        app.state.database = database
        await database.init_db()
        logger.info("🗄️ Banco de dados inicializado")
        try:
            yield
        finally:
            await database.close()
            logger.info("🛑 Conexões com o banco encerradas")

    app = FastAPI(
        title="IBGE API",
        description="CRUD de localidades do IBGE com autenticação JWT",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_service = TokenService(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # Middleware para logging de requisições
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log de todas as requisições para depuração."""
        start_time = time.time()
        path = request.url.path
        method = request.method

        logger.info(f"🔔 {method} {path}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(f"💥 ERRO: {method} {path} - Exceção: {str(e)} - Tempo: {process_time:.4f}s")
            raise

        process_time = time.time() - start_time
        status_code = response.status_code

        # Status code colorido por categoria
        if status_code < 400:
            status_str = f"✅ {status_code}"
        elif status_code < 500:
            status_str = f"⚠️ {status_code}"
        else:
            status_str = f"❌ {status_code}"

        logger.info(f"🏁 {method} {path} - {status_str} - {process_time:.3f}s")
        return response

    # Configurar handlers de exceção
    setup_error_handlers(app, debug=settings.debug)

    app.include_router(auth_router.router)
    app.include_router(locations_router.router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
