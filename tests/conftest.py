"""
pytest配置文件，定义测试环境和共享的测试夹具（fixtures）。

主要功能：
1. 配置测试数据库连接（内存 SQLite，所有连接共享同一个库）
2. 提供数据库会话管理（每个测试一个事务，结束后回滚）
3. 提供FastAPI测试客户端
4. 提供测试数据样本
"""

import os

# 必须在导入 app 之前设置，避免测试时在当前目录创建 SQLite 文件
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.main import app
from app.utils import get_db

# 导入统一的Base和所有模型以确保它们被注册
from app.db_base import Base
from app.models import TdeeCalculation, OneRepMaxCalculation  # noqa: F401

SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """测试前建表，测试后删表"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """提供数据库会话，测试结束后回滚，保证测试之间互不影响"""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db_session):
    """提供FastAPI测试客户端"""
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_tdee_params():
    """提供测试用的 TDEE 查询参数"""
    return {
        "weightKg": 80,
        "heightCm": 180,
        "age": 25,
        "sex": "male",
        "activity": 1.55,
    }


@pytest.fixture
def sample_one_rep_max_body():
    """提供测试用的 1RM 请求体"""
    return {"weight": 100, "reps": 5}
