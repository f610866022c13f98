"""FastAPI entrypoint for the definition validation API."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stepcheck.config import API_HOST, API_PORT, ENABLE_PROMETHEUS
from stepcheck.interfaces.api.validation_endpoints import router as validation_router
from stepcheck.observability.prometheus_metrics import router as metrics_router
from stepcheck.utils.logger import setup_logging

# ──────────────────────── logging ──────────────────────────
setup_logging()
logger = logging.getLogger(__name__)

# ───────────────────────── FastAPI app ─────────────────────

app = FastAPI(
    title="StepCheck API",
    description="Structural validation and source diagnostics for workflow definitions",
)

if ENABLE_PROMETHEUS:
    app.include_router(metrics_router)

# CORS: the editor runs on its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# routers
app.include_router(validation_router)


@app.get("/")
async def root():
    return {"message": "StepCheck API is running"}


# ─────────────────────────── run uvicorn ────────────────────
def run() -> None:
    logger.info("serving on %s:%s", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT, reload=False)


if __name__ == "__main__":
    run()
