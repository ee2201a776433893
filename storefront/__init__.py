import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.configuration.settings import Configuration
from storefront.core.exceptions.errors import CartValidationError, StorefrontError
from storefront.database.connection import init_db
from storefront.functions.scheduler import start_scheduler

from storefront.auth.auth import AuthRouter
from storefront.admin.products import AdminProductRouter
from storefront.admin.orders import AdminOrderRouter
from storefront.routes.product import ProductRouter
from storefront.routes.category import CategoryRouter
from storefront.routes.cart import CartRouter
from storefront.routes.order import OrderRouter
from storefront.routes.upload import UploadRouter

configuration = Configuration()

logging.info(f"SISTEMA >>> Ambiente carregado: {configuration.environment}")


async def storefront_error_handler(request: Request, exc: StorefrontError):
    if isinstance(exc, CartValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})
    logging.error(f"SISTEMA >>> Erro não tratado em {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def create_app(start_jobs: Optional[bool] = None) -> FastAPI:
    """
    Cria e configura a aplicação FastAPI, incluindo middlewares e rotas.
    """
    app = FastAPI(title="Storefront")

    logging.info("SISTEMA >>> Inicializando o banco de dados...")
    init_db()

    if configuration.enable_scheduler if start_jobs is None else start_jobs:
        start_scheduler()
        logging.info("SISTEMA >>> Agendador iniciado")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=configuration.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)

    app.include_router(AuthRouter())
    app.include_router(ProductRouter())
    app.include_router(CategoryRouter())
    app.include_router(CartRouter())
    app.include_router(OrderRouter())
    app.include_router(UploadRouter())
    app.include_router(AdminProductRouter())
    app.include_router(AdminOrderRouter())

    return app
