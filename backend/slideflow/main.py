"""FastAPI app exposing the carousel layout engine"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slideflow.config import get_settings
from slideflow.routes import router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Carousel Layout")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router, prefix="/api")
logger.info(f"API routes loaded: {[r.path for r in app.routes if hasattr(r, 'path') and r.path.startswith('/api')]}")
