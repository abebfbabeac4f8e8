from agentsflow.db.database import Base, create_all, get_db, get_engine, get_session_factory

__all__ = ["Base", "create_all", "get_db", "get_engine", "get_session_factory"]
