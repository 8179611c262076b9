from pydantic import BaseModel


class OptimizeRequest(BaseModel):
    html: str
    path: str = ""  # request path relative to the site home, e.g. "blog/post"
    user_agent: str = ""
    query: dict[str, str] = {}
    cacheable: bool = True  # False for responses that must not be optimized


class OptimizeResponse(BaseModel):
    html: str
    modified: bool


class ExclusionsRequest(BaseModel):
    path: str = ""
    user_agent: str = ""
    query: dict[str, str] = {}
    exclusions: list[str] = []


class ExclusionsResponse(BaseModel):
    exclusions: list[str]
