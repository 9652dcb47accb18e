"""Calculation Repository（计算记录数据访问层）

职责：
- 封装 tdee_calculations / one_rep_max_calculations 两张表的插入与查询
- 只做数据访问，不做校验，也不处理异常（由 AnalyticsService 统一回滚与转换）
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select

from ..models import TdeeCalculation, OneRepMaxCalculation


def insert_tdee(
    db: Session,
    sex: int,
    weight_kg: float,
    height_cm: float,
    age_years: int,
    activity: float,
    tdee_kcal: int,
    note: Optional[str] = None,
    user_agent: Optional[str] = None,
    client_id: Optional[str] = None,
) -> TdeeCalculation:
    record = TdeeCalculation(
        sex=sex,
        weight_kg=weight_kg,
        height_cm=height_cm,
        age_years=age_years,
        activity=activity,
        tdee_kcal=tdee_kcal,
        note=note,
        user_agent=user_agent,
        client_id=client_id,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def insert_one_rep_max(
    db: Session,
    weight: float,
    reps: int,
    one_rm: float,
    note: Optional[str] = None,
    user_agent: Optional[str] = None,
    client_id: Optional[str] = None,
) -> OneRepMaxCalculation:
    record = OneRepMaxCalculation(
        weight=weight,
        reps=reps,
        one_rm=one_rm,
        note=note,
        user_agent=user_agent,
        client_id=client_id,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def list_recent_tdee(db: Session, limit: int) -> List[TdeeCalculation]:
    """按 id 倒序取最近 limit 条（id 单调递增，同一秒插入的记录也能区分先后）"""
    stmt = select(TdeeCalculation).order_by(TdeeCalculation.id.desc()).limit(limit)
    return list(db.execute(stmt).scalars().all())


def list_recent_one_rep_max(db: Session, limit: int) -> List[OneRepMaxCalculation]:
    stmt = select(OneRepMaxCalculation).order_by(OneRepMaxCalculation.id.desc()).limit(limit)
    return list(db.execute(stmt).scalars().all())
