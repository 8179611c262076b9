"""LCP / above-the-fold element descriptors as recorded by the beacon.

The `type` field selects the shape; each shape only declares the fields that
exist for it, so code dispatching on the model class can never read a field
that was not recorded.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

NOT_FOUND = "not found"


class _Frozen(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}


class BgSetEntry(_Frozen):
    src: str


class PictureSource(_Frozen):
    srcset: str
    media: str = ""


class ImgDescriptor(_Frozen):
    type: Literal["img"]
    src: str


class ImgSrcsetDescriptor(_Frozen):
    type: Literal["img-srcset"]
    src: str
    srcset: str = ""
    sizes: str = ""


class BgImgSetDescriptor(_Frozen):
    type: Literal["bg-img-set"]
    bg_set: list[BgSetEntry] = []


class BgImgDescriptor(_Frozen):
    type: Literal["bg-img"]
    bg_set: list[BgSetEntry] = []


class PictureDescriptor(_Frozen):
    type: Literal["picture"]
    src: str
    sources: list[PictureSource] = []


ElementDescriptor = Annotated[
    Union[
        ImgDescriptor,
        ImgSrcsetDescriptor,
        BgImgSetDescriptor,
        BgImgDescriptor,
        PictureDescriptor,
    ],
    Field(discriminator="type"),
]

_descriptor_adapter: TypeAdapter[ElementDescriptor] = TypeAdapter(ElementDescriptor)


def _load(raw: Any) -> Any:
    """Decode a stored JSON column; empty and "not found" become None."""
    if raw is None or raw == "" or raw == NOT_FOUND:
        return None
    if isinstance(raw, (str, bytes)):
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding undecodable descriptor payload: {e}")
            return None
    return raw


def parse_descriptor(data: Any) -> ElementDescriptor | None:
    """Validate one decoded descriptor; wrong-shape data yields None."""
    if not data or not isinstance(data, dict):
        return None
    try:
        return _descriptor_adapter.validate_python(data)
    except ValidationError as e:
        logger.debug(f"Ignoring descriptor of unexpected shape: {e.error_count()} error(s)")
        return None


def decode_lcp(raw: Any) -> ElementDescriptor | None:
    return parse_descriptor(_load(raw))


def decode_viewport(raw: Any) -> list[ElementDescriptor]:
    """Decode the above-the-fold list; bad entries are dropped one by one."""
    data = _load(raw)
    if not data or not isinstance(data, list):
        return []
    descriptors = []
    for item in data:
        descriptor = parse_descriptor(item)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors
