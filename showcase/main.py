from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from showcase.api.health import router as health_router
from showcase.api.showcase import router as showcase_router
from showcase.config import get_settings
from showcase.cors import install_cors
from showcase.errors import FaultBoundaryMiddleware, register_fault_handlers
from showcase.observability.logging import configure_logging
from showcase.observability.middleware import RequestContextMiddleware


templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title="Framework Showcase", version="0.1.0")
    app.include_router(health_router)
    app.include_router(showcase_router)
    register_fault_handlers(app)

    # Added innermost first: CORS -> request context -> fault boundary -> routes.
    app.add_middleware(FaultBoundaryMiddleware)
    app.add_middleware(RequestContextMiddleware)
    install_cors(app, settings)

    @app.on_event("startup")
    def _startup() -> None:
        configure_logging(get_settings())

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"service_name": get_settings().service_name},
        )

    return app


app = create_app()
