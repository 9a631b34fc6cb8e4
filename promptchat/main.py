import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptchat import __version__
from promptchat.core.config import get_settings
from promptchat.core.container import get_container
from promptchat.core.exceptions import ConfigurationError
from promptchat.core.logging import configure_logging
from promptchat.infrastructure.database import dispose_engine, init_db
from promptchat.interfaces.http.deps import get_generation_client
from promptchat.interfaces.http.errors import register_exception_handlers
from promptchat.interfaces.http.rate_limit import limiter
from promptchat.interfaces.http.routers import create_api_router
from promptchat.modules.generation import GenerationClient
from promptchat.schemas import GenerationHealth, HealthResponse

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    generation = get_container().generation_client
    credential_issue = generation.credential_issue()
    if credential_issue is not None:
        logger.critical("Refusing to start: %s", credential_issue)
        raise ConfigurationError(credential_issue)

    await init_db()

    report = generation.check_configuration()
    for issue in report.issues:
        logger.warning("Generation configuration issue: %s", issue)
    if report.valid and settings.anthropic.probe_on_startup:
        await generation.check_connectivity()

    logger.info("%s started in %s mode", settings.project_name, settings.environment)
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Template-driven chat completions backed by the Anthropic Messages API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.limiter = limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health(generation: GenerationClient = Depends(get_generation_client)) -> HealthResponse:
        report = generation.check_configuration()
        return HealthResponse(
            status="ok" if report.valid else "degraded",
            environment=settings.environment,
            version=__version__,
            generation=GenerationHealth(state=generation.state.value, valid=report.valid, issues=report.issues),
        )

    return app


app = create_app()
