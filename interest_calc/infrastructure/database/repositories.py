"""Data access layer for persisted calculator settings"""

from typing import Callable, Optional
from sqlalchemy.orm import Session
from interest_calc.infrastructure.database.models import StoredSetting


class SettingsRepository:
    """
    Key/value settings store backed by the calculator_setting table.

    Each get/set opens its own short session so the repository can be held by a
    long-lived calculator session.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        """Fetch the stored value for key, or None if never written"""
        with self.session_factory() as db:
            setting = db.get(StoredSetting, key)
            return setting.value if setting is not None else None

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite the value for key"""
        with self.session_factory() as db:
            setting = db.get(StoredSetting, key)
            if setting is None:
                db.add(StoredSetting(key=key, value=value))
            else:
                setting.value = value
            db.commit()
