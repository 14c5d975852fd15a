# pantryscan/prompts.py: one instruction per analysis type
from __future__ import annotations
from typing import Dict

from .errors import ValidationError

RECEIPT_PROMPT = """\
Analyze this grocery receipt and extract the purchased items.
Return ONLY a JSON object with this exact structure, no prose and no markdown:
{
  "store": "store name",
  "date": "date printed on the receipt",
  "items": [
    {
      "name": "item name",
      "quantity": number,
      "unit": "pieces/lbs/gallons/loaf/dozen/pack/etc",
      "price": number,
      "category": "Produce/Dairy/Meat/Bakery/Pantry/Frozen/Beverages/Household/etc"
    }
  ],
  "total": number
}

Example:
{"store": "Fresh Market", "date": "3/14/2024",
 "items": [{"name": "Large Eggs", "quantity": 12, "unit": "pieces", "price": 3.49, "category": "Dairy"},
           {"name": "Whole Wheat Bread", "quantity": 1, "unit": "loaf", "price": 2.99, "category": "Bakery"}],
 "total": 6.48}

Quantities should describe what actually went into the pantry, not how many receipt lines there are:
- A carton of eggs is 12 pieces (a dozen) unless the receipt says 6 or 18.
- Bread, bagels and tortillas: count loaves or packs, e.g. 1 loaf.
- Multi-packs (yogurt 4-pack, soda 12-pack, 6 cans): quantity is the unit count, unit "pieces".
- Milk and juice: use gallons, half gallons or quarts as printed; a plain "MILK" line is 1 gallon.
- Produce sold by weight: use lbs from the weight line; otherwise count pieces.
- Repeated lines for the same product are one item with the summed quantity and price.
Skip subtotals, taxes, discounts, bag fees and payment lines.
If something is unclear, estimate a reasonable quantity and use common sense for units and categories.
"""

MEAL_PROMPT = """\
Analyze this meal photo and identify the ingredients that were used.
Return ONLY a JSON object with this exact structure, no prose and no markdown:
{
  "meal_name": "short description of the meal",
  "ingredients": ["ingredient1", "ingredient2", "ingredient3"],
  "estimated_portions": {
    "ingredient1": 0.5,
    "ingredient2": 1.0,
    "ingredient3": 0.25
  }
}

Example:
{"meal_name": "Spaghetti bolognese",
 "ingredients": ["pasta", "ground beef", "tomato sauce", "parmesan"],
 "estimated_portions": {"pasta": 1.0, "ground beef": 0.5, "tomato sauce": 0.5, "parmesan": 0.1}}

Rules:
- Use generic grocery names (e.g. "chicken breast", not "grilled lemon chicken").
- Every key in estimated_portions must exactly match an entry in ingredients.
- Portions are the amount consumed on a 0.1 to 2.0 scale, where 1.0 is one standard serving.
"""

PROMPTS: Dict[str, str] = {
    "receipt": RECEIPT_PROMPT,
    "meal": MEAL_PROMPT,
}


def build_prompt(analysis_type: str) -> str:
    try:
        return PROMPTS[analysis_type]
    except KeyError:
        raise ValidationError(f"Unsupported type: {analysis_type!r}") from None
