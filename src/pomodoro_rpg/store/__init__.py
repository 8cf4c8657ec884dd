"""Pomodoro RPG Store -- SQLite 存档持久化"""

from .save_system import SaveSystem, create_save_system
from .sqlite_init import init_db, verify_wal_mode

__all__ = [
    "SaveSystem",
    "create_save_system",
    "init_db",
    "verify_wal_mode",
]
