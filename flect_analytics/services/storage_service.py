"""JSON persistence shape for check-ins and insights.

Only the serialised form matters here; where the text lives is up to the
caller. ``JsonFileStore`` is a simple directory-backed store on top of it.
"""
from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from flect_analytics.core.exceptions import StorageError
from flect_analytics.schemas.checkin import CheckIn
from flect_analytics.schemas.insight import Insight

logger = logging.getLogger(__name__)

_CHECK_INS = TypeAdapter(List[CheckIn])
_INSIGHTS = TypeAdapter(List[Insight])


class StorageService:
    @staticmethod
    def dump_check_ins(check_ins: Sequence[CheckIn]) -> str:
        return _CHECK_INS.dump_json(list(check_ins)).decode("utf-8")

    @staticmethod
    def load_check_ins(raw: Optional[str | bytes]) -> List[CheckIn]:
        if not raw:
            return []
        try:
            return _CHECK_INS.validate_json(raw)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Failed to decode stored check-ins, starting empty: {e}")
            return []

    @staticmethod
    def dump_insights(insights: Sequence[Insight]) -> str:
        return _INSIGHTS.dump_json(list(insights)).decode("utf-8")

    @staticmethod
    def load_insights(raw: Optional[str | bytes]) -> List[Insight]:
        if not raw:
            return []
        try:
            return _INSIGHTS.validate_json(raw)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Failed to decode stored insights, starting empty: {e}")
            return []


class JsonFileStore:
    """Keeps ``check_ins.json`` and ``insights.json`` in one directory."""

    CHECK_INS_FILE = "check_ins.json"
    INSIGHTS_FILE = "insights.json"

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, name: str) -> str:
        return os.path.join(self.directory, name)

    def _read(self, name: str) -> Optional[str]:
        path = self._path(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def _write(self, name: str, payload: str) -> None:
        path = self._path(name)
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

    def load_check_ins(self) -> List[CheckIn]:
        return StorageService.load_check_ins(self._read(self.CHECK_INS_FILE))

    def save_check_ins(self, check_ins: Sequence[CheckIn]) -> None:
        self._write(self.CHECK_INS_FILE, StorageService.dump_check_ins(check_ins))

    def load_insights(self) -> List[Insight]:
        return StorageService.load_insights(self._read(self.INSIGHTS_FILE))

    def save_insights(self, insights: Sequence[Insight]) -> None:
        self._write(self.INSIGHTS_FILE, StorageService.dump_insights(insights))

    def clear(self) -> None:
        """Bulk reset: drop everything stored."""
        for name in (self.CHECK_INS_FILE, self.INSIGHTS_FILE):
            path = self._path(name)
            if os.path.exists(path):
                os.remove(path)
        logger.info(f"Cleared stored data in {self.directory}")
