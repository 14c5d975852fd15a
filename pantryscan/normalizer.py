# pantryscan/normalizer.py: turn free-form model text into a receipt/meal dict
from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional, Union

from .errors import ShapeError
from .placeholders import fallback_result

logger = logging.getLogger(__name__)

FENCE_OPEN_RE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
FENCE_CLOSE_RE = re.compile(r"\n?```$")
OBJECT_RE = re.compile(r"\{[\s\S]*\}")

# field that must hold a list for each analysis type
REQUIRED_LISTS = {
    "receipt": "items",
    "meal": "ingredients",
}


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Err:
    reason: str
    error: Optional[Exception] = None


Result = Union[Ok, Err]


@dataclass(frozen=True)
class Normalized:
    data: Dict[str, Any]
    fallback: bool = False
    reason: Optional[str] = None


# ---------- steps ----------
def trim(text: Any) -> Result:
    if not isinstance(text, str):
        return Err(f"expected text, got {type(text).__name__}")
    text = text.strip()
    return Ok(text) if text else Err("empty response")


def strip_fences(text: str) -> Result:
    text = FENCE_OPEN_RE.sub("", text, count=1)
    text = FENCE_CLOSE_RE.sub("", text, count=1)
    return Ok(text.strip())


def _loads_object(text: str) -> Result:
    try:
        value = json.loads(text)
    except ValueError as e:
        return Err(f"invalid JSON: {e}", e)
    if not isinstance(value, dict):
        return Err(f"JSON is a {type(value).__name__}, not an object")
    return Ok(value)


def extract_object(text: str) -> Result:
    """Parse the text outright, else the span from the first `{` to the last `}`.

    Covers models that wrap the JSON in a sentence or two.
    """
    direct = _loads_object(text)
    if isinstance(direct, Ok):
        return direct
    m = OBJECT_RE.search(text)
    if not m:
        return Err("no JSON object found")
    return _loads_object(m.group(0))


def check_shape(obj: Dict[str, Any], analysis_type: str) -> Result:
    """The required field must be a non-empty list."""
    field = REQUIRED_LISTS.get(analysis_type)
    if field is None:
        problem = f"unknown analysis type {analysis_type!r}"
    elif not isinstance(obj.get(field), list):
        problem = f"'{field}' missing or not a list"
    elif not obj[field]:
        problem = f"'{field}' is empty"
    else:
        return Ok(obj)
    return Err(problem, ShapeError(problem))


def check_portion_keys(obj: Dict[str, Any]) -> None:
    """Warn when estimated_portions and ingredients disagree. Advisory only."""
    portions = obj.get("estimated_portions")
    if not isinstance(portions, dict):
        return
    ingredients = {i for i in obj.get("ingredients", []) if isinstance(i, str)}
    extra = sorted(k for k in portions if k not in ingredients)
    if extra:
        logger.warning("estimated_portions keys not in ingredients: %s", extra)


# ---------- pipeline ----------
class ResponseNormalizer:
    """Runs the steps in order; the first Err short-circuits to the fallback.

    For a supported type `normalize` never raises, so a model that answered
    with junk still yields a well-shaped payload.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self._today = today or date.today

    def parse(self, text: Any, analysis_type: str) -> Result:
        result = trim(text)
        for step in (strip_fences, extract_object, lambda obj: check_shape(obj, analysis_type)):
            if isinstance(result, Err):
                return result
            result = step(result.value)
        return result

    def normalize(self, text: Any, analysis_type: str) -> Normalized:
        result = self.parse(text, analysis_type)
        if isinstance(result, Ok):
            if analysis_type == "meal":
                check_portion_keys(result.value)
            return Normalized(data=result.value)

        logger.warning(
            "Failed to parse AI response as %s JSON (%s): %r",
            analysis_type, result.reason, text,
        )
        return Normalized(
            data=fallback_result(analysis_type, self._today()),
            fallback=True,
            reason=result.reason,
        )
