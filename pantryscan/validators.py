# pantryscan/validators.py: request checks that run before any model call
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Optional

from .errors import InvalidImageError, ValidationError
from .schemas import ANALYSIS_TYPES

SENTINEL_IMAGE = "test"
MIN_IMAGE_LENGTH = 100
DEFAULT_SUBTYPE = "jpeg"

DATA_URL_RE = re.compile(r"^data:image/(?P<subtype>[A-Za-z0-9.+-]+);base64,", re.IGNORECASE)
BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")


@dataclass(frozen=True)
class AnalyzeRequest:
    image: str
    type: str

    @property
    def is_sentinel(self) -> bool:
        return self.image == SENTINEL_IMAGE


@dataclass(frozen=True)
class ImagePayload:
    data: str  # bare base64, prefix removed
    subtype: str = DEFAULT_SUBTYPE

    @property
    def data_url(self) -> str:
        return f"data:image/{self.subtype};base64,{self.data}"


def _required_str(body: dict, field: str) -> str:
    value = body.get(field)
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Missing required field: {field}")
    return value


def validate_request(body: Any) -> AnalyzeRequest:
    """Check the decoded JSON body for a usable `image` and `type`."""
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    image = _required_str(body, "image")
    analysis_type = _required_str(body, "type")
    if analysis_type not in ANALYSIS_TYPES:
        raise ValidationError(
            f"Unsupported type: {analysis_type!r}. Expected one of: " + ", ".join(ANALYSIS_TYPES)
        )
    return AnalyzeRequest(image=image, type=analysis_type)


def split_data_url(image: str) -> ImagePayload:
    m = DATA_URL_RE.match(image)
    if not m:
        return ImagePayload(data=image)
    return ImagePayload(data=image[m.end():], subtype=m.group("subtype").lower())


def is_valid_base64_image(data: Optional[str]) -> bool:
    """Syntactic sniff only: base64 alphabet and long enough to be a picture.

    Nothing is decoded, so valid base64 that isn't an image still passes.
    """
    if not data or not isinstance(data, str):
        return False
    if not BASE64_RE.fullmatch(data):
        return False
    return len(data) >= MIN_IMAGE_LENGTH


def check_image(image: str) -> ImagePayload:
    payload = split_data_url(image)
    if not is_valid_base64_image(payload.data):
        raise InvalidImageError("Invalid image format. Please provide a valid base64 image.")
    return payload
