from __future__ import annotations
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

AnalysisType = Literal["receipt", "meal"]
ANALYSIS_TYPES = ("receipt", "meal")


def receipt_date(day: Optional[date] = None) -> str:
    """Short US-style date (M/D/YYYY), the format receipts are echoed back in."""
    day = day or date.today()
    return f"{day.month}/{day.day}/{day.year}"


class LineItem(BaseModel):
    name: str
    quantity: float
    unit: str  # pieces, lbs, gallons, item, ...
    price: float
    category: str  # Produce, Dairy, Meat, Bakery, Pantry, Household, ...


class ReceiptResult(BaseModel):
    store: str
    date: str
    items: List[LineItem] = Field(min_length=1)
    total: float


class MealResult(BaseModel):
    meal_name: str
    ingredients: List[str] = Field(min_length=1)
    # 0.1-2.0 is what the prompt asks for; not enforced
    estimated_portions: Dict[str, float]


class AnalyzeSuccess(BaseModel):
    success: Literal[True] = True
    data: Dict[str, Any]


class AnalyzeFailure(BaseModel):
    success: Literal[False] = False
    error: str
    details: Optional[Any] = None
