"""Display context value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayContext:
    """How a gram quantity reads relative to a food's declared serving.

    Attributes:
        quantity_text: Label for the selected quantity ("pour 2 tranches", "pour 150g")
        serving_description: Declared serving in words ("1 tranche", "100 grammes")
        is_per_product: True when the serving unit is a count or container
    """

    quantity_text: str
    serving_description: str
    is_per_product: bool
