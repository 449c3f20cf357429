"""
Rate limiting shared by the application and its routers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from agrowatch.config import settings


limiter = Limiter(key_func=get_remote_address)

PLACEMENT_RATE_LIMIT = f"{settings.rate_limit_requests}/minute"
