# taskboard/config.py
import os
from dotenv import load_dotenv

# .env 파일이 있으면 환경 변수로 읽어옵니다.
load_dotenv()

# 데이터베이스 연결 문자열 (기본값: 프로젝트 루트의 SQLite 파일)
DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite:///taskboard.db")

# "1"이면 SQLAlchemy가 실행하는 SQL을 로그로 남깁니다.
DATABASE_ECHO: bool = os.environ.get("DATABASE_ECHO") == "1"

# 애플리케이션 로그 레벨 (DEBUG, INFO, WARNING, ...)
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
