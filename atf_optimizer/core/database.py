from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    pass


def build_engine(database_url: str, echo: bool = False, pool_size: int = 10, max_overflow: int = 5):
    """Create a synchronous engine for the metadata table.

    Lookups happen inline while a page is being post-processed, so the
    engine is sync and endpoints run in FastAPI's threadpool.
    """
    engine_kwargs = {"echo": echo}

    if database_url.startswith("sqlite"):
        # SQLite doesn't support pool_size/max_overflow with StaticPool
        from sqlalchemy.pool import StaticPool

        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = pool_size
        engine_kwargs["max_overflow"] = max_overflow
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["pool_recycle"] = 3600

    return create_engine(database_url, **engine_kwargs)


def build_session_factory(engine) -> sessionmaker:
    return sessionmaker(engine, class_=Session, expire_on_commit=False)
