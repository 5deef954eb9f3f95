"""
Main entrypoint for the Song Catalog API.

This module assembles the FastAPI application, sets up logging,
installs the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn song_catalog_api.app.main:app --reload

Each application owns one ``RecordStore`` on ``app.state.store``.
Data lives only as long as the process does.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .core.config import settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.store import RecordStore
from .api.v1.router import router as v1_router


def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[RecordStore]
        Store backing the application.  A fresh empty store is created
        when omitted; tests pass their own to inspect it directly.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the handlers
    # below can safely log messages.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.store = store if store is not None else RecordStore()

    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")

    logging.getLogger(__name__).debug("Application %s created", settings.project_name)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
