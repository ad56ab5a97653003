import logging

from sqlalchemy.engine import Engine

from .database import Base
from . import models  # noqa: F401  (모든 모델을 Base.metadata에 등록)

logger = logging.getLogger(__name__)


def initialize_db(engine: Engine):
    """
    모든 테이블과 유니크 인덱스를 생성합니다. (이미 존재하면 생성하지 않음)
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables are ready (%s).", ", ".join(sorted(Base.metadata.tables)))
