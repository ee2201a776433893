import logging
from contextlib import contextmanager
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storefront.configuration.settings import Configuration

configuration = Configuration()


def build_engine(database_url: str):
    # SQLite em memória precisa de uma única conexão compartilhada
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(configuration.connect_to_database())


def init_db(bind=None):
    # Importa os modelos para registrar as tabelas no metadata
    import storefront.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logging.info("BANCO DE DADOS >>> Tabelas verificadas/criadas")


def get_session():
    with Session(engine) as session:
        yield session


@contextmanager
def session_scope():
    """Sessão para jobs fora do ciclo de requisição."""
    with Session(engine) as session:
        yield session
