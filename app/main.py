"""
健身计算器 API 主应用文件。

本文件是FastAPI应用的入口点，负责：
1. 创建FastAPI应用实例并初始化日志
2. 启动时创建分析记录表（如果不存在）
3. 配置跨域（前端与 API 不同源）
4. 注册路由与健康检查
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .logging_config import setup_logging
from .config import LOG_LEVEL, get_cors_origins
from .db_base import Base
from .utils import engine
from . import models  # noqa: F401  注册 ORM 模型到 Base.metadata

from .api.fitness import router as fitness_router

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("[startup] tables ready")
    yield


app = FastAPI(title="Fitness Calculators API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# 路由注册
app.include_router(fitness_router)


@app.get("/health", tags=["健康检查"])
def health():
    """数据库可连通时返回 ok，否则 503"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("[health][db-unreachable]")
        raise HTTPException(status_code=503, detail="database unreachable")
    return {"status": "ok"}
