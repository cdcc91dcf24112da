"""FastAPI application, status route, and startup."""

import logging
from typing import List

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from webhook_receiver.adapters.web.webhook_routes import webhook_router
from webhook_receiver.config import CONFIG, __version__

logger = logging.getLogger(__name__)

app = FastAPI(title="Webhook Receiver", version=__version__)
app.include_router(webhook_router)


class StatusResponse(BaseModel):
    version: str
    receivers: List[str]


def configure_logging(level: str = CONFIG.log_level) -> None:
    """Install a root handler. A no-op when logging is already configured."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.get("/status", response_model=StatusResponse)
async def status():
    """Server status endpoint"""
    return StatusResponse(version=__version__, receivers=list(CONFIG.receivers))


@app.on_event("startup")
async def startup_event():
    configure_logging()
    logger.info("Webhook receiver %s starting", __version__)
    logger.info("Enabled receivers: %s", ", ".join(CONFIG.receivers) or "none")


def main() -> None:
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=CONFIG.port, log_level=CONFIG.log_level.lower())


if __name__ == "__main__":
    main()
