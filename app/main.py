# app/main.py
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import Base, engine
from app.models import kv_entry  # noqa: F401  (テーブル登録)
from app.routers import courses, evaluation, requirements, templates

import time
import logging
from fastapi import Request
from app.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("app")

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"

# テーブル作成（無ければ）
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Credit Checker Backend", version="1.0.0")

# 学科テンプレートもここから配信する
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(requirements.router)
app.include_router(courses.router)
app.include_router(evaluation.router)
app.include_router(templates.router)


@app.get("/")
def root():
    return {"message": "Credit checker is running!"}
