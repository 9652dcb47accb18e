"""
Analytics Service（计算记录服务）

职责：
- 追加写入 TDEE / 1RM 计算记录（只插入，不更新不删除）
- 读取最近的 N 条记录，按创建顺序倒序
- 把数据库异常统一转换为 StorageError

通过 get_analytics_service 依赖注入到路由中，每个请求持有自己的 Session。
"""

from typing import List, Optional
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from ..config import RECENT_MIN_LIMIT, RECENT_MAX_LIMIT
from ..core.analytics.formulas import clamp_limit
from ..models import TdeeCalculation, OneRepMaxCalculation
from ..repositories import calculation_repo
from ..utils import get_db

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """数据库不可达或拒绝写入/读取时抛出"""


class AnalyticsService:
    """计算记录服务"""

    def __init__(self, db: Session):
        self.db = db

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.exception("[analytics][rollback-failed]")

    def log_tdee(
        self,
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
        """插入一条 TDEE 计算记录

        Args:
            sex: 0 = 男, 1 = 女
            tdee_kcal: 已取整的结果
            note / user_agent / client_id: 可选，None 表示未提供

        Returns:
            TdeeCalculation: 带有数据库分配的 id 与 created_at

        Raises:
            StorageError: 写入失败（连接不可用、约束冲突等）
        """
        try:
            record = calculation_repo.insert_tdee(
                self.db, sex, weight_kg, height_cm, age_years, activity, tdee_kcal,
                note=note, user_agent=user_agent, client_id=client_id,
            )
        except Exception as e:  # 含驱动层抛出的非 DBAPIError，如整数越界的 OverflowError
            self._rollback()
            logger.error("[analytics][tdee-insert-failed] err=%s", e)
            raise StorageError("failed to store TDEE calculation") from e
        logger.debug("[analytics][tdee-insert] id=%s tdee_kcal=%s", record.id, tdee_kcal)
        return record

    def log_one_rep_max(
        self,
        weight: float,
        reps: int,
        one_rm: float,
        note: Optional[str] = None,
        user_agent: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> OneRepMaxCalculation:
        """插入一条 1RM 计算记录，失败时抛出 StorageError"""
        try:
            record = calculation_repo.insert_one_rep_max(
                self.db, weight, reps, one_rm,
                note=note, user_agent=user_agent, client_id=client_id,
            )
        except Exception as e:
            self._rollback()
            logger.error("[analytics][orm-insert-failed] err=%s", e)
            raise StorageError("failed to store one-rep-max calculation") from e
        logger.debug("[analytics][orm-insert] id=%s one_rm=%.2f", record.id, one_rm)
        return record

    def try_log_tdee(self, *args, **kwargs) -> Optional[TdeeCalculation]:
        """尽力而为的写入：失败只记日志，返回 None"""
        try:
            return self.log_tdee(*args, **kwargs)
        except StorageError:
            logger.warning("[analytics][tdee-log-skipped]", exc_info=True)
            return None

    def try_log_one_rep_max(self, *args, **kwargs) -> Optional[OneRepMaxCalculation]:
        try:
            return self.log_one_rep_max(*args, **kwargs)
        except StorageError:
            logger.warning("[analytics][orm-log-skipped]", exc_info=True)
            return None

    def get_recent(self, limit: int) -> List[TdeeCalculation]:
        """最近的 TDEE 记录，新的在前；limit 会再次被限制在 [1, 500]"""
        limit = clamp_limit(limit, RECENT_MIN_LIMIT, RECENT_MAX_LIMIT)
        try:
            return calculation_repo.list_recent_tdee(self.db, limit)
        except SQLAlchemyError as e:
            self._rollback()
            logger.error("[analytics][tdee-select-failed] limit=%s err=%s", limit, e)
            raise StorageError("failed to read TDEE calculations") from e

    def get_recent_one_rep_max(self, limit: int) -> List[OneRepMaxCalculation]:
        limit = clamp_limit(limit, RECENT_MIN_LIMIT, RECENT_MAX_LIMIT)
        try:
            return calculation_repo.list_recent_one_rep_max(self.db, limit)
        except SQLAlchemyError as e:
            self._rollback()
            logger.error("[analytics][orm-select-failed] limit=%s err=%s", limit, e)
            raise StorageError("failed to read one-rep-max calculations") from e


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    """FastAPI 依赖项：为当前请求构造 AnalyticsService"""
    return AnalyticsService(db)
