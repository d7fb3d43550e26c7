from app.db.session import async_session_maker, check_db_health, get_db, get_session_maker, init_db
from app.db.base import Base

__all__ = ["Base", "async_session_maker", "check_db_health", "get_db", "get_session_maker", "init_db"]
