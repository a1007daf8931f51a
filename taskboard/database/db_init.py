from .database import engine, Base
from . import models  # noqa: F401  (모든 모델을 Base.metadata에 등록)
from taskboard.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def initialize_db(bind=None):
    """
    모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)

    Args:
        bind: 사용할 엔진. 생략하면 config.DATABASE_URL 기반의 기본 엔진을 사용합니다.
    """
    bind = bind or engine
    logger.info("Creating tables on %s", bind.url)
    Base.metadata.create_all(bind=bind)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == '__main__':
    configure_logging()
    initialize_db()
