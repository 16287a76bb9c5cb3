"""FastAPI application factory.

Every request runs inside the storefront domain context, with the request
path and method bound to the structured log context.
"""

from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import storefront
from storefront.settings import get_settings
from storefront.utils.logging import add_context, clear_context


def build_app() -> FastAPI:
    from storefront.activity.api import activity_router
    from storefront.catalogue.api import category_router, product_router
    from storefront.dashboard.api import dashboard_router
    from storefront.identity.api import auth_router, favorite_router, user_router
    from storefront.ordering.api import admin_order_router, cart_router, order_router
    from storefront.payments.api import checkout_router

    app = FastAPI(
        title="Storefront API",
        description="Storefront catalogue, cart, checkout and admin back-office",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and request log context."""
        clear_context()
        add_context(request_id=uuid4().hex[:12], method=request.method, path=request.url.path)
        with storefront.domain_context():
            response = await call_next(request)
        return response

    register_exception_handlers(app)

    for router in (
        auth_router,
        user_router,
        favorite_router,
        category_router,
        product_router,
        activity_router,
        cart_router,
        order_router,
        admin_order_router,
        checkout_router,
        dashboard_router,
    ):
        app.include_router(router)

    upload_dir = Path(get_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
