from sqlalchemy import Engine, create_engine

from habitkernel.config import settings


def make_engine(url: str | None = None) -> Engine:
    raw_url = url or settings.database_url
    if raw_url.startswith("postgres://"):
        raw_url = raw_url.replace("postgres://", "postgresql://", 1)
    return create_engine(raw_url, pool_pre_ping=True)
