import app.logging_config
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.api.deps import get_kv_store
from app.api.v1.webhook import router as webhook_router
from app.api.v1.buttons import router as buttons_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await get_kv_store().close()
    logger.info("[APP] Recursos liberados")

app = FastAPI(title="MenuBot – Telegram", lifespan=lifespan)

app.include_router(webhook_router)
app.include_router(buttons_router)

@app.get("/")
async def root():
    return {"message": "MenuBot – Telegram"}
