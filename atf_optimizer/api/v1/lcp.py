import logging

from fastapi import APIRouter, Depends

from atf_optimizer.api.deps import get_controller
from atf_optimizer.schemas.optimize import (
    ExclusionsRequest,
    ExclusionsResponse,
    OptimizeRequest,
    OptimizeResponse,
)
from atf_optimizer.services.context import PageRequest
from atf_optimizer.services.controller import AboveTheFoldController

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/optimize",
    response_model=OptimizeResponse,
    summary="Optimize the LCP element of a rendered page",
    description="Preloads the page's measured LCP resource right after </title> and raises the fetch priority of its <img>. Pages that have not been measured yet get the LCP beacon injected before </body>. The HTML is returned untouched whenever there is nothing safe to do.",
)
def optimize(
    body: OptimizeRequest,
    controller: AboveTheFoldController = Depends(get_controller),
):
    request = PageRequest(
        path=body.path,
        user_agent=body.user_agent,
        query=body.query,
        cacheable=body.cacheable,
    )
    html = controller.lcp(body.html, request)
    return OptimizeResponse(html=html, modified=html != body.html)


@router.post(
    "/exclusions",
    response_model=ExclusionsResponse,
    summary="Lazy-load exclusions for a page",
    description="Appends the URL paths of the page's LCP and above-the-fold resources to the given exclusion list, without duplicates.",
)
def exclusions(
    body: ExclusionsRequest,
    controller: AboveTheFoldController = Depends(get_controller),
):
    request = PageRequest(path=body.path, user_agent=body.user_agent, query=body.query)
    return ExclusionsResponse(exclusions=controller.add_exclusions(body.exclusions, request))
