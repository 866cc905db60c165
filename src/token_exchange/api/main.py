"""REST API for the token exchange."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..infrastructure.config import ConfigLoader
from ..infrastructure.factories import ExchangeFactory
from .endpoints import accounts as accounts_endpoints
from .endpoints import exchange as exchange_endpoints
from .endpoints import token as token_endpoints

logger = logging.getLogger(__name__)


def create_app(config_loader: Optional[ConfigLoader] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    config_loader : Optional[ConfigLoader]
        Loader for the application configuration. Defaults to
        ``config/default.yaml``; the file is only read at startup.

    Returns
    -------
    FastAPI
        Configured FastAPI application instance

    Notes
    -----
    Services are created in the lifespan startup and stored in
    ``app.state`` for dependency injection:
    - ledger: the initialized ExchangeLedger
    - token_ledger: the token ledger it trades against
    - native_currency: the native-currency ledger
    - account_service: the account registry
    """
    loader = config_loader or ConfigLoader()

    async def startup(app: FastAPI):
        """Build the exchange services from configuration."""
        services = ExchangeFactory.create_from_config(loader)

        app.state.ledger = services.ledger
        app.state.token_ledger = services.token
        app.state.native_currency = services.native
        app.state.account_service = services.accounts
        app.state.administrator = services.administrator

        logger.info(
            f"API started: administrator={services.administrator.account_id}, "
            f"ratio={services.ledger.exchange_ratio}, "
            f"token={services.token.symbol}"
        )
        if loader.get_accounts_config().administrator_api_key is None:
            logger.info(
                f"Generated administrator API key: "
                f"{services.administrator.api_key}"
            )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage the application lifecycle."""
        await startup(app)
        yield
        logger.info("API stopped")

    app = FastAPI(
        title="Token Exchange API",
        description="Swap a fungible token against native currency",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root(request: Request):
        """Health check endpoint."""
        ledger = getattr(request.app.state, "ledger", None)
        return {
            "status": "ok",
            "service": "Token Exchange API",
            "version": __version__,
            "ledger_initialized": bool(ledger and ledger.is_initialized),
        }

    app.include_router(accounts_endpoints.router)
    app.include_router(token_endpoints.router)
    app.include_router(exchange_endpoints.router)

    return app


app = create_app()
