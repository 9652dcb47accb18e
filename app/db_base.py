"""
统一的 SQLAlchemy 声明式基类。

所有 ORM 模型都继承这里的 Base，建表（create_all）和测试清表时也统一使用它。
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
