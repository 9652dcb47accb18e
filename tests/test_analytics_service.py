"""
计算记录服务测试
测试追加写入、最近记录的排序与条数限制、数据库异常转换
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.services.analytics_service import AnalyticsService, StorageError


def _broken_session():
    session = MagicMock(spec=Session)
    err = OperationalError("INSERT", {}, Exception("database is down"))
    session.commit.side_effect = err
    session.execute.side_effect = err
    return session


@pytest.fixture
def service(db_session):
    return AnalyticsService(db_session)


def _log_tdee(service, tdee_kcal=2000, **kwargs):
    return service.log_tdee(0, 80.0, 180.0, 25, 1.2, tdee_kcal, **kwargs)


class TestLogging:
    """写入测试"""

    def test_log_tdee_assigns_id_and_timestamp(self, service):
        record = _log_tdee(service, note="warmup", user_agent="pytest", client_id="abc")

        assert record.id is not None
        assert record.created_at is not None
        assert record.sex == 0
        assert record.weight_kg == 80.0
        assert record.age_years == 25
        assert record.tdee_kcal == 2000
        assert record.note == "warmup"
        assert record.user_agent == "pytest"
        assert record.client_id == "abc"

    def test_optional_fields_default_to_none(self, service):
        record = service.log_one_rep_max(100.0, 5, 116.67)

        assert record.id is not None
        assert record.note is None
        assert record.user_agent is None
        assert record.client_id is None

    def test_ids_are_monotonic(self, service):
        first = _log_tdee(service)
        second = _log_tdee(service)
        assert second.id > first.id

    def test_failed_write_raises_storage_error(self):
        session = _broken_session()
        with pytest.raises(StorageError):
            AnalyticsService(session).log_tdee(1, 60.0, 165.0, 30, 1.2, 1584)
        session.rollback.assert_called_once()

    def test_try_log_swallows_storage_error(self):
        service = AnalyticsService(_broken_session())
        assert service.try_log_one_rep_max(100.0, 5, 116.67) is None
        assert service.try_log_tdee(1, 60.0, 165.0, 30, 1.2, 1584) is None

    def test_value_too_large_for_column_raises_storage_error(self, service):
        with pytest.raises(StorageError):
            _log_tdee(service, tdee_kcal=10 ** 20)
        assert service.get_recent(10) == []

    def test_try_log_swallows_driver_overflow(self, service):
        assert service.try_log_one_rep_max(100.0, 10 ** 20, 116.67) is None
        assert service.get_recent_one_rep_max(10) == []


class TestRecent:
    """最近记录读取测试"""

    def test_empty_table_returns_empty_list(self, service):
        assert service.get_recent(100) == []
        assert service.get_recent_one_rep_max(100) == []

    def test_newest_first(self, service):
        ids = [_log_tdee(service, tdee_kcal=kcal).id for kcal in (1800, 1900, 2000)]

        recent = service.get_recent(10)

        assert [r.id for r in recent] == list(reversed(ids))
        assert [r.tdee_kcal for r in recent] == [2000, 1900, 1800]

    def test_limit_bounds_result(self, service):
        for reps in range(1, 6):
            service.log_one_rep_max(100.0, reps, 100.0 * (1 + reps / 30))

        recent = service.get_recent_one_rep_max(2)

        assert len(recent) == 2
        assert [r.reps for r in recent] == [5, 4]

    def test_limit_is_clamped_to_at_least_one(self, service):
        _log_tdee(service)
        _log_tdee(service)
        assert len(service.get_recent(0)) == 1
        assert len(service.get_recent(-5)) == 1

    def test_limit_is_clamped_to_max(self, service):
        for i in range(505):
            service.log_one_rep_max(50.0 + i, 1, 51.0)
        assert len(service.get_recent_one_rep_max(10000)) == 500

    def test_tables_are_independent(self, service):
        _log_tdee(service)
        assert service.get_recent_one_rep_max(10) == []

    def test_repeated_reads_are_identical(self, service):
        for kcal in (1500, 1600):
            _log_tdee(service, tdee_kcal=kcal)
        first = [(r.id, r.tdee_kcal) for r in service.get_recent(10)]
        second = [(r.id, r.tdee_kcal) for r in service.get_recent(10)]
        assert first == second

    def test_failed_read_raises_storage_error(self):
        with pytest.raises(StorageError):
            AnalyticsService(_broken_session()).get_recent(10)
