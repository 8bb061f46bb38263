import logging

from fastapi import FastAPI

from mandrill_demo.core.config import load_env
from mandrill_demo.observability.logger import init_sentry
from mandrill_demo.routes.demo import router as demo_router
from mandrill_demo.routes.health import router as health_router

logger = logging.getLogger("mandrill_demo")
logging.basicConfig(level=logging.INFO)

load_env()
init_sentry()

app = FastAPI(title="Mandrill Email Demo")

app.include_router(demo_router, tags=["demo"])
app.include_router(health_router, tags=["health"])


def run() -> None:
    """Console entry point: serve the demo form on port 4567."""
    import uvicorn

    logger.info("Open your browser to: http://localhost:4567")
    uvicorn.run(app, host="0.0.0.0", port=4567)
