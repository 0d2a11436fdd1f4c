from __future__ import annotations

from fastapi import FastAPI

from volfee.api.routers.fees import router as fees_router
from volfee.api.routers.hooks import router as hooks_router
from volfee.shared.config import get_settings
from volfee.shared.logging_setup import configure_logging


configure_logging(get_settings().log_level)

app = FastAPI(title="Volatility Fee Hook API")
app.include_router(hooks_router)
app.include_router(fees_router)
