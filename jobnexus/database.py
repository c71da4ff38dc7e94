from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine; in-memory SQLite shares one connection across threads."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    kwargs = {}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, connect_args=connect_args, echo=echo, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    # Records are handed back to the route layer after the session closes.
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine):
    """Create all tables. Called at startup when the SQL backend is selected."""
    import jobnexus.models  # noqa: F401  registers the tables on Base.metadata
    Base.metadata.create_all(bind=engine)
