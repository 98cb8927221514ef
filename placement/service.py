"""
Placement Service Entrypoint

FastAPI application exposing the placement selector to the provisioning layer.
"""
from fastapi import FastAPI
import logging

from placement.api import select
from placement.database import init_db
from placement.logging_config import setup_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="Placement Selector Service")

app.include_router(select.router)


@app.on_event("startup")
def startup_init():
    """Configure logging and make sure inventory tables exist"""
    setup_logging("placement")
    init_db()
    logger.info("Placement service startup complete")


@app.get("/")
def root():
    return {
        "service": "placement",
        "message": "Placement selector service running",
    }
