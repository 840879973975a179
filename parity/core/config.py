"""
애플리케이션 설정
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from dotenv import load_dotenv


"""env 로딩 우선순위
1) OS 환경변수
2) 프로젝트 루트의 .env
"""

_here = Path(__file__).resolve()
_repo_root_env = _here.parents[2] / ".env"
try:
    if _repo_root_env.exists():
        load_dotenv(dotenv_path=str(_repo_root_env), override=False)
except OSError:
    pass


class Settings(BaseSettings):
    """애플리케이션 설정"""
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite+aiosqlite:///./data/parity.db"
    REDIS_URL: str = "redis://localhost:6379/0"

    # db_cache 엔트리와 태그 SET의 TTL (초)
    CACHE_TTL_SECONDS: int = 3600
    CACHE_KEY_PREFIX: str = "dbcache"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def validate_settings():
    """설정 검증"""
    if settings.ENVIRONMENT == "production":
        if settings.DATABASE_URL.startswith("sqlite"):
            raise ValueError("프로덕션 환경에서는 PostgreSQL DATABASE_URL이 필요합니다.")
    return True


validate_settings()
