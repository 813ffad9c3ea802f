from functools import lru_cache

from fastapi import Query

from app.services.auth.identity import FirebaseIdentityVerifier, IdentityVerifier
from app.services.fact_check.provider import FactCheckProvider

MAX_PAGE_SIZE = 100


@lru_cache()
def get_fact_check_provider() -> FactCheckProvider:
    """One provider (and HTTP connection pool) per process."""
    return FactCheckProvider()


@lru_cache()
def get_identity_verifier() -> IdentityVerifier:
    return FirebaseIdentityVerifier()


class PageParams:
    """Query parameters shared by paged listings."""

    def __init__(self, page: int = Query(0, ge=0), size: int = Query(10, ge=1)):
        self.page = page
        # Oversized requests are clamped rather than rejected
        self.size = min(size, MAX_PAGE_SIZE)


class WidePageParams(PageParams):
    def __init__(self, page: int = Query(0, ge=0), size: int = Query(20, ge=1)):
        super().__init__(page=page, size=size)
