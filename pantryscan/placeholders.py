# pantryscan/placeholders.py: canned payloads for sentinel requests and parse fallbacks
from __future__ import annotations
from datetime import date
from typing import Any, Dict, Optional

from .errors import ValidationError
from .schemas import LineItem, MealResult, ReceiptResult, receipt_date


def sentinel_result(analysis_type: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Fixed payload returned for `image == "test"` so callers can check connectivity."""
    if analysis_type == "receipt":
        return ReceiptResult(
            store="Test Store",
            date=receipt_date(today),
            items=[LineItem(name="Test Item", quantity=1, unit="piece", price=1.00, category="Test")],
            total=1.00,
        ).model_dump()
    if analysis_type == "meal":
        return MealResult(
            meal_name="Test Meal",
            ingredients=["test ingredient"],
            estimated_portions={"test ingredient": 1.0},
        ).model_dump()
    raise ValidationError(f"Unsupported type: {analysis_type!r}")


def fallback_result(analysis_type: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Placeholder used when the model answered but its text couldn't be used."""
    if analysis_type == "receipt":
        return ReceiptResult(
            store="Unknown Store",
            date=receipt_date(today),
            items=[LineItem(name="Receipt Item", quantity=1, unit="item", price=0.00, category="Unknown")],
            total=0.00,
        ).model_dump()
    if analysis_type == "meal":
        return MealResult(
            meal_name="Meal from photo",
            ingredients=["unknown"],
            estimated_portions={"unknown": 0.5},
        ).model_dump()
    raise ValidationError(f"Unsupported type: {analysis_type!r}")
