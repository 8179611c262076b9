from fastapi import APIRouter

from atf_optimizer.api.v1 import lcp

api_router = APIRouter(prefix="/v1")

api_router.include_router(lcp.router, prefix="/lcp", tags=["LCP"])
