"""
Application FastAPI de ReelSort.

Initialise l'application web avec le Container DI et monte les routes
de declenchement et de suivi des scans.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..container import Container
from .routes.scan import router as scan_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au demarrage et attend les scans a l'arret."""
    container = getattr(app.state, "container", None) or Container()
    container.database.init()
    app.state.container = container
    yield
    await container.scan_orchestrator().wait()


def create_app(container: Container | None = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container a utiliser (les tests fournissent le leur)
    """
    application = FastAPI(title="ReelSort", lifespan=lifespan)
    if container is not None:
        application.state.container = container
    application.include_router(scan_router)
    return application


app = create_app()
