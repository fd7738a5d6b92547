import os, logging
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from .limits import rate_limit
from .brew import router as brew_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="Brew Planner API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_ORIGINS, allow_methods=["*"], allow_headers=["*"]
)

app.include_router(brew_router, dependencies=[Depends(rate_limit)])
logger.info("CORS origins: %s", _ORIGINS)

@app.get("/health")
def health():
    return {"status": "ok"}
