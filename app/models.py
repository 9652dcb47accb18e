# 这个文件定义了项目的数据库模型（ORM模型），用于描述和操作数据库中的表结构。
# 两张表都是只追加的计算日志：每次成功计算插入一行，之后不再修改、不再删除。
#
# id 由数据库自增分配（单调递增），created_at 在插入时由数据库时钟写入。
# note / user_agent / client_id 为可空字段，未提供时保存为 NULL。

from sqlalchemy import Column, Integer, SmallInteger, String, Float, DateTime, BigInteger
from sqlalchemy.sql import func

from .db_base import Base

# SQLite 只对 INTEGER PRIMARY KEY 做自增，其它数据库使用 BIGINT
IdType = BigInteger().with_variant(Integer, "sqlite")

# 列宽上限：age_years 为 SMALLINT，reps / tdee_kcal 为 INT
SMALLINT_MAX = 32767
INT_MAX = 2147483647


# TDEE 计算记录
class TdeeCalculation(Base):
    __tablename__ = 'tdee_calculations'
    id = Column(IdType, primary_key=True, autoincrement=True)             # 记录ID，自增
    created_at = Column(DateTime(timezone=True), server_default=func.now())  # 插入时间
    sex = Column(SmallInteger, nullable=False)                             # 0 = 男, 1 = 女
    weight_kg = Column(Float, nullable=False)                              # 体重 (kg)
    height_cm = Column(Float, nullable=False)                              # 身高 (cm)
    age_years = Column(SmallInteger, nullable=False)                       # 年龄
    activity = Column(Float, nullable=False, default=1.2)                  # 活动系数
    tdee_kcal = Column(Integer, nullable=False)                            # 结果，四舍五入到整数千卡
    note = Column(String(255), nullable=True)
    user_agent = Column(String(512), nullable=True)
    client_id = Column(String(64), nullable=True)

    def __repr__(self):
        return f"<TdeeCalculation id={self.id} tdee_kcal={self.tdee_kcal}>"


# 1RM（一次最大重复重量）计算记录
class OneRepMaxCalculation(Base):
    __tablename__ = 'one_rep_max_calculations'
    id = Column(IdType, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    weight = Column(Float, nullable=False)                                 # 实际举起的重量
    reps = Column(Integer, nullable=False)                                 # 重复次数
    one_rm = Column(Float, nullable=False)                                 # Epley 估算的 1RM
    note = Column(String(255), nullable=True)
    user_agent = Column(String(512), nullable=True)
    client_id = Column(String(64), nullable=True)

    def __repr__(self):
        return f"<OneRepMaxCalculation id={self.id} one_rm={self.one_rm}>"
