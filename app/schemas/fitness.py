"""
Fitness 计算器模块的请求和响应模式

定义 /api/tdee 与 /api/one-rep-max 相关接口的输入输出数据结构。
对外 JSON 字段使用 camelCase（createdAt、weightKg 等），Python 侧保持 snake_case。
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import INT_MAX, TdeeCalculation, OneRepMaxCalculation


class CamelModel(BaseModel):
    """输出 camelCase、同时允许按字段名构造的基础模型"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _format_created_at(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class TdeeResponse(CamelModel):
    """TDEE 计算结果"""
    tdee: float = Field(..., description="每日总能量消耗（千卡），未取整")


class TdeeRow(CamelModel):
    """一条 TDEE 计算记录"""
    id: int
    created_at: Optional[str] = Field(None, description="ISO-8601 时间，未设置时为 null")
    sex: int = Field(..., description="0 = 男, 1 = 女")
    weight_kg: float
    height_cm: float
    age_years: int
    activity: float
    tdee_kcal: int

    @classmethod
    def from_record(cls, record: TdeeCalculation) -> "TdeeRow":
        return cls(
            id=record.id,
            created_at=_format_created_at(record.created_at),
            sex=record.sex,
            weight_kg=record.weight_kg,
            height_cm=record.height_cm,
            age_years=record.age_years,
            activity=record.activity,
            tdee_kcal=record.tdee_kcal,
        )


class OneRepMaxRequest(BaseModel):
    """1RM 计算请求体"""
    weight: float = Field(..., ge=1, allow_inf_nan=False, description="实际举起的重量")
    reps: int = Field(..., ge=1, le=INT_MAX, description="完成的次数")


class OneRepMaxResponse(CamelModel):
    """1RM 计算结果"""
    one_rep_max: float


class OneRepMaxRow(CamelModel):
    """一条 1RM 计算记录"""
    id: int
    created_at: Optional[str] = None
    weight: float
    reps: int
    one_rm: float

    @classmethod
    def from_record(cls, record: OneRepMaxCalculation) -> "OneRepMaxRow":
        return cls(
            id=record.id,
            created_at=_format_created_at(record.created_at),
            weight=record.weight,
            reps=record.reps,
            one_rm=record.one_rm,
        )
