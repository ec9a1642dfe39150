from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from customer_registry.api.v1.router import api_router_v1
from customer_registry.core.config import settings
from customer_registry.core.logging import logger, setup_logging


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Dados inválidos são 400, como no restante da API
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API de cadastro de clientes, telefones e serviços, com espelho no Google Sheets",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        version=settings.PROJECT_VERSION,
    )

    # Configuração de CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Em desenvolvimento as tabelas são criadas no startup; em produção, use Alembic
    if settings.ENVIRONMENT == "development" and settings.STORAGE_BACKEND == "database":
        @app.on_event("startup")
        def create_tables():
            from customer_registry.database import engine
            from customer_registry.db import models  # noqa: F401  registra os modelos
            from customer_registry.db.base_class import Base

            Base.metadata.create_all(bind=engine)
            logger.info("Tabelas criadas com sucesso (apenas em desenvolvimento)")

    app.include_router(api_router_v1, prefix=settings.API_V1_STR)

    @app.get("/", tags=["Root"])
    def read_root():
        return {
            "message": f"Bem-vindo à API {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}",
            "docs": "/docs",
            "status": "operacional",
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health Check"])
    def health_check():
        """Endpoint para verificação de saúde da API"""
        return {
            "status": "healthy",
            "storage": settings.STORAGE_BACKEND,
            "environment": settings.ENVIRONMENT,
        }

    return app


app = create_app()
