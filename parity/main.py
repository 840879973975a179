"""
Parity 가격 정책 백엔드 - FastAPI 메인 애플리케이션
"""

from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from parity.core.config import settings
from parity.core.database import engine, Base, check_db_connection
from parity.core.redis_client import check_redis_connection
import parity.models  # noqa: F401  (메타데이터에 테이블 등록)

from parity.api.subscription import router as subscription_router
from parity.api.products import router as products_router
from parity.api.countries import router as countries_router

# 로깅 설정
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료 시 실행되는 이벤트"""
    logger.info("🚀 Parity API 시작")

    # 데이터베이스 테이블 생성 (개발용)
    if settings.ENVIRONMENT == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("📊 데이터베이스 테이블 생성 완료")

    yield

    await engine.dispose()
    logger.info("👋 Parity API 종료")


app = FastAPI(
    title="Parity API",
    description="국가별 구매력 할인 / 상품 방문 / 구독 티어 관리",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
    lifespan=lifespan,
)

app.include_router(subscription_router, prefix="/subscription", tags=["구독"])
app.include_router(products_router, prefix="/products", tags=["상품"])
app.include_router(countries_router, prefix="/countries", tags=["국가"])


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트"""
    database_ok = await check_db_connection()
    redis_ok = await check_redis_connection()
    return {
        "status": "healthy" if database_ok and redis_ok else "degraded",
        "environment": settings.ENVIRONMENT,
        "database": "connected" if database_ok else "unavailable",
        "redis": "connected" if redis_ok else "unavailable",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "parity.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
    )
