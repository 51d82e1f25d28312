from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from src.config.settings import config

_engines: Dict[str, Engine] = {}


def get_centre_user_engine(database_url: str = None) -> Engine:
    """
    Return a shared SQLAlchemy engine for the centre user database.
    Engines are created lazily, one per URL.
    """
    url = database_url or config.CENTRE_USER_DATABASE_URL
    if not url:
        raise ValueError("CENTRE_USER_DATABASE_URL is not set")
    if url not in _engines:
        _engines[url] = create_engine(url)
    return _engines[url]
