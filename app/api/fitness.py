"""
Fitness calculators API routes

包含：
- GET  /api/tdee：计算每日总能量消耗（Mifflin-St Jeor × 活动系数）
- GET  /api/tdee/recent：最近的 TDEE 计算记录
- POST /api/one-rep-max：计算 1RM（Epley 公式）
- GET  /api/one-rep-max/recent：最近的 1RM 计算记录

计算结果写入分析表是"尽力而为"的：写入失败只记日志，不影响计算结果的返回。
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Query
from typing import Callable, List, Optional
import logging

from ..config import (
    DEFAULT_ACTIVITY,
    RECENT_DEFAULT_LIMIT,
    RECENT_MIN_LIMIT,
    RECENT_MAX_LIMIT,
    is_background_logging_enabled,
)
from ..core.analytics.formulas import (
    clamp_limit,
    compute_one_rep_max,
    compute_tdee,
    is_finite,
    round_kcal,
    sex_code,
)
from ..schemas.fitness import (
    OneRepMaxRequest,
    OneRepMaxResponse,
    OneRepMaxRow,
    TdeeResponse,
    TdeeRow,
)
from ..models import SMALLINT_MAX
from ..services.analytics_service import AnalyticsService, StorageError, get_analytics_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["计算器"])

USER_AGENT_MAX_LEN = 512
AGE_MAX = SMALLINT_MAX


def _ensure_finite(value: float, name: str) -> None:
    """输入都是有限数，但乘积仍可能溢出为 inf；此时按参数错误拒绝，且不写入记录"""
    if not is_finite(value):
        logger.info("[fitness-api][non-finite-result] %s=%s", name, value)
        raise HTTPException(status_code=422, detail=f"{name} 计算结果溢出，请检查输入范围")


def _dispatch_log(background_tasks: BackgroundTasks, log_func: Callable, **kwargs) -> None:
    """同步写入，或在开启后台模式时放到响应之后执行"""
    if is_background_logging_enabled():
        background_tasks.add_task(log_func, **kwargs)
    else:
        log_func(**kwargs)


@router.get("/tdee", response_model=TdeeResponse)
def tdee(
    background_tasks: BackgroundTasks,
    weight_kg: float = Query(..., alias="weightKg", ge=1, allow_inf_nan=False, description="体重（kg）"),
    height_cm: float = Query(..., alias="heightCm", ge=1, allow_inf_nan=False, description="身高（cm）"),
    age: int = Query(..., ge=1, le=AGE_MAX, description="年龄（岁）"),
    sex: str = Query(..., description="male / female，不区分大小写；其它值按 female 计算"),
    activity: float = Query(DEFAULT_ACTIVITY, gt=0, allow_inf_nan=False, description="活动系数，默认 1.2"),
    user_agent: Optional[str] = Header(None),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """计算 TDEE

    示例：GET /api/tdee?weightKg=80&heightCm=180&age=25&sex=male&activity=1.55
    返回 {"tdee": 2797.75}
    """
    value = compute_tdee(weight_kg, height_cm, age, sex, activity)
    _ensure_finite(value, "tdee")

    _dispatch_log(
        background_tasks,
        analytics.try_log_tdee,
        sex=sex_code(sex),
        weight_kg=weight_kg,
        height_cm=height_cm,
        age_years=age,
        activity=activity,
        tdee_kcal=round_kcal(value),
        note=None,
        user_agent=user_agent[:USER_AGENT_MAX_LEN] if user_agent else None,
        client_id=None,
    )
    return TdeeResponse(tdee=value)


@router.get("/tdee/recent", response_model=List[TdeeRow])
def tdee_recent(
    limit: int = Query(RECENT_DEFAULT_LIMIT, description="返回条数，限制在 [1, 500]"),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """最近的 TDEE 计算记录（新的在前）"""
    limit = clamp_limit(limit, RECENT_MIN_LIMIT, RECENT_MAX_LIMIT)
    try:
        records = analytics.get_recent(limit)
    except StorageError as e:
        logger.exception("[fitness-api][tdee-recent][error] limit=%s", limit)
        raise HTTPException(status_code=500, detail=f"读取 TDEE 记录失败: {e}")
    return [TdeeRow.from_record(r) for r in records]


@router.post("/one-rep-max", response_model=OneRepMaxResponse)
def one_rep_max(
    body: OneRepMaxRequest,
    background_tasks: BackgroundTasks,
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """计算 1RM：weight × (1 + reps / 30)"""
    value = compute_one_rep_max(body.weight, body.reps)
    _ensure_finite(value, "oneRepMax")

    _dispatch_log(
        background_tasks,
        analytics.try_log_one_rep_max,
        weight=body.weight,
        reps=body.reps,
        one_rm=value,
    )
    return OneRepMaxResponse(one_rep_max=value)


@router.get("/one-rep-max/recent", response_model=List[OneRepMaxRow])
def one_rep_max_recent(
    limit: int = Query(RECENT_DEFAULT_LIMIT, description="返回条数，限制在 [1, 500]"),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """最近的 1RM 计算记录（新的在前）"""
    limit = clamp_limit(limit, RECENT_MIN_LIMIT, RECENT_MAX_LIMIT)
    try:
        records = analytics.get_recent_one_rep_max(limit)
    except StorageError as e:
        logger.exception("[fitness-api][orm-recent][error] limit=%s", limit)
        raise HTTPException(status_code=500, detail=f"读取 1RM 记录失败: {e}")
    return [OneRepMaxRow.from_record(r) for r in records]
