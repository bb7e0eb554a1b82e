from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from albapay.config.settings import DATABASE_URL, DATA_DIR


def make_engine(url: str = DATABASE_URL):
    return create_engine(
        url,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {}
    )


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None):
    """Create tables"""
    from . import models  # noqa: F401  registers tables on Base.metadata

    if bind is None:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        bind = engine
    Base.metadata.create_all(bind=bind)
