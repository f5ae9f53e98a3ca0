from accounting.database.base import Base
from accounting.database.engine import create_db_engine
from accounting.database.session import make_session_factory, session_scope

__all__ = ["Base", "create_db_engine", "make_session_factory", "session_scope"]
