import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.db import engine, Base
from . import models  # noqa: F401  registers tables on Base
from .api.routes.assessment import router as assessment_router
from .api.routes.chat import router as chat_router
from .api.routes.misc import router as misc_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="MindCare Assessment Service", version=settings.API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)

app.include_router(misc_router)
app.include_router(assessment_router)
app.include_router(chat_router)
