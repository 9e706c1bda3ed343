# ivf_subsidy/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager

from .db import Base, engine
from . import models  # noqa: F401  (registers tables on Base.metadata)
from .errors import install_error_handlers
from .logging_config import log_event
from .routes import calculations, ops
from .settings import get_settings

settings = get_settings()


def _ensure_db_ready() -> None:
    Base.metadata.create_all(bind=engine)


# Run schema init at import time so pytest cannot bypass it
_ensure_db_ready()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_db_ready()
    log_event("STARTUP", "service ready", {
        "env": settings.ENV,
        "ruleset_version": settings.RULESET_VERSION,
        "history_cap": settings.HISTORY_CAP,
    })
    yield


app = FastAPI(title="IVF Subsidy Calculator API", version=settings.APP_VERSION, lifespan=lifespan)
install_error_handlers(app)

app.include_router(calculations.router)
app.include_router(ops.router)


@app.get("/")
def health():
    return {"status": "ok", "service": "ivf-subsidy"}
