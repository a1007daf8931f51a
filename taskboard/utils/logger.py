# taskboard/utils/logger.py
import logging
from typing import Optional

from taskboard import config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    루트 로거를 설정합니다. 레벨을 지정하지 않으면 config.LOG_LEVEL을 사용합니다.

    애플리케이션 시작 시 한 번만 호출하면 되며, 라이브러리로 사용할 때는
    호출하지 않아도 각 모듈 로거가 상위 설정을 그대로 따릅니다.
    """
    logging.basicConfig(level=level or config.LOG_LEVEL, format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """모듈 이름으로 로거를 가져옵니다. (예: get_logger(__name__))"""
    return logging.getLogger(name)
