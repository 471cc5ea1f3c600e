"""
Tests for the JSON persistence shape and the file-backed store.

Run with: python -m pytest tests/test_storage.py -v
"""

import json
import logging
from datetime import timedelta

import pytest


class TestStorageService:
    """Tests for dumping and loading check-ins and insights."""

    def test_check_in_round_trip_is_exact(self, make_check_in, today, now):
        from flect_analytics.schemas.checkin import CheckInState, Level
        from flect_analytics.services.storage_service import StorageService

        check_ins = [
            make_check_in(
                today,
                happy_text="Lunch outside",
                improve_text="Sleep earlier",
                mood="Grateful",
                energy=Level.HIGH,
                sleep=Level.LOW,
                social=Level.MEDIUM,
                highlight="Sunny",
                wellbeing_score=72,
                completion_state=CheckInState.FOLLOW_UP_PENDING,
                ai_response="What made lunch special?",
                ai_question_asked="What made lunch special?",
                updated_at=now + timedelta(minutes=5),
            ),
            make_check_in(today - timedelta(days=1), mood="Some custom mood"),
        ]

        loaded = StorageService.load_check_ins(StorageService.dump_check_ins(check_ins))
        assert loaded == check_ins

    def test_insight_round_trip_is_exact(self, now):
        from flect_analytics.schemas.insight import Insight, InsightMetadata, InsightType
        from uuid import uuid4

        from flect_analytics.services.storage_service import StorageService

        insights = [
            Insight(
                type=InsightType.CORRELATION,
                title="Sleep-Mood Connection",
                description="Better sleep, better days.",
                confidence=0.72,
                data_points=9,
                created_at=now,
                valid_until=now + timedelta(days=7),
                metadata=InsightMetadata(
                    related_check_in_ids=[uuid4(), uuid4()],
                    keywords=["sleep"],
                    frequency_data={"goodSleepMood": 430},
                    time_patterns={"best": "morning"},
                ),
            ),
            Insight(type=InsightType.MILESTONE, title="30-day streak", description="", confidence=0.9),
        ]

        loaded = StorageService.load_insights(StorageService.dump_insights(insights))
        assert loaded == insights

    def test_dump_is_json_list(self, make_check_in, today):
        from flect_analytics.services.storage_service import StorageService

        payload = json.loads(StorageService.dump_check_ins([make_check_in(today)]))
        assert isinstance(payload, list)
        assert payload[0]["date"] == today.isoformat()

    def test_corrupt_payload_is_empty_history(self, caplog):
        from flect_analytics.services.storage_service import StorageService

        with caplog.at_level(logging.WARNING):
            assert StorageService.load_check_ins("{not json") == []
            assert StorageService.load_check_ins('[{"date": "not-a-date"}]') == []
            assert StorageService.load_insights('{"oops": true}') == []
        assert "Failed to decode" in caplog.text

    def test_missing_payload_is_empty(self):
        from flect_analytics.services.storage_service import StorageService

        assert StorageService.load_check_ins(None) == []
        assert StorageService.load_insights("") == []


class TestJsonFileStore:
    """Tests for the directory-backed store."""

    def test_save_and_load(self, tmp_path, daily_check_ins):
        from flect_analytics.services.storage_service import JsonFileStore

        store = JsonFileStore(str(tmp_path / "data"))
        check_ins = daily_check_ins(3)
        store.save_check_ins(check_ins)

        assert store.load_check_ins() == check_ins
        assert store.load_insights() == []

    def test_corrupt_file_loads_empty(self, tmp_path):
        from flect_analytics.services.storage_service import JsonFileStore

        (tmp_path / JsonFileStore.CHECK_INS_FILE).write_text("garbage", encoding="utf-8")
        assert JsonFileStore(str(tmp_path)).load_check_ins() == []

    def test_clear(self, tmp_path, daily_check_ins):
        from flect_analytics.services.storage_service import JsonFileStore

        store = JsonFileStore(str(tmp_path))
        store.save_check_ins(daily_check_ins(2))
        store.save_insights([])
        store.clear()

        assert store.load_check_ins() == []
        assert not (tmp_path / JsonFileStore.CHECK_INS_FILE).exists()

    def test_write_failure_raises_storage_error(self, tmp_path):
        from flect_analytics.core.exceptions import StorageError
        from flect_analytics.services.storage_service import JsonFileStore

        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(StorageError):
            JsonFileStore(str(blocker)).save_insights([])
