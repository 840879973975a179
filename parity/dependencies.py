from typing import Optional

from fastapi import Header, HTTPException, status

from parity.core.database import get_db
from parity.core.redis_client import get_redis_client

# owner id는 앞단의 인증 계층이 검증한 뒤 헤더로 넘겨준다.


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="인증된 사용자 ID가 필요합니다",
        )
    return x_user_id.strip()


__all__ = ["get_db", "get_redis_client", "get_current_user_id"]
