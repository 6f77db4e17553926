"""
Food catalog models.

Shapes of food records supplied by external catalogs (local dataset,
barcode lookups). Treated as untrusted input: validated with pydantic,
unit strings kept raw until the converter resolves them.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PortionSizeData(BaseModel):
    """
    Structured portion declared by a catalog record.

    Example:
        >>> data = PortionSizeData(amount=2, unit="tranches")
        >>> data.unit
        'tranches'
    """

    model_config = ConfigDict(frozen=True)

    amount: float = Field(..., gt=0, description="Number of units")
    unit: str = Field(..., min_length=1, description="Raw unit text")

    @field_validator("unit")
    @classmethod
    def strip_unit(cls, v: str) -> str:
        """Trim surrounding whitespace."""
        if not v.strip():
            raise ValueError("Unit cannot be empty or whitespace")
        return v.strip()


class FoodRecord(BaseModel):
    """
    Food item as returned by a catalog lookup.

    Calories are for one declared serving: `serving_size` when present,
    otherwise `portion_size`, otherwise 100g.

    Example:
        >>> food = FoodRecord(
        ...     food_id="baguette",
        ...     name="Baguette",
        ...     calories=75,
        ...     serving_size="1 tranche",
        ... )
        >>> food.calories
        75.0
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    food_id: str = Field(..., min_length=1, alias="foodId")
    name: str = Field(..., min_length=1)
    calories: float = Field(..., ge=0, description="kcal per declared serving")
    serving_size: Optional[str] = Field(default=None, alias="servingSize")
    portion_size: Optional[PortionSizeData] = Field(default=None, alias="portionSize")
