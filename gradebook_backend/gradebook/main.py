import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gradebook.api.routes import router as api_router
from gradebook.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Gradebook API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
logger.info("Gradebook API ready (environment=%s)", settings.environment)


@app.get("/health")
def health_check():
    return {"status": "ok"}
