import os, time, logging
from fastapi import HTTPException, Request
import redis as redis_lib

logger = logging.getLogger(__name__)

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
_RATE = int(os.getenv("RATE_LIMIT_PER_MIN", "60"))

_redis = None
def _r():
    global _redis
    if _redis is None:
        _redis = redis_lib.from_url(REDIS_URL, decode_responses=True)
    return _redis

def _client_id(request: Request) -> str:
    return request.client.host if request.client else "anon"

def rate_limit(request: Request):
    bucket = f"rl:{_client_id(request)}:{int(time.time()//60)}"
    try:
        r = _r()
        hits = r.incr(bucket)
        if hits == 1:
            r.expire(bucket, 70)  # 1 minute window
    except redis_lib.RedisError as e:
        # if Redis is down, don't block
        logger.warning("rate limit skipped, redis unavailable: %s", e)
        return
    if hits > _RATE:
        logger.info("rate limit exceeded for %s", bucket)
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
