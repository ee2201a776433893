from storefront.database.connection import engine, get_session, init_db

__all__ = ["engine", "get_session", "init_db"]
