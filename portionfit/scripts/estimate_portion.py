#!/usr/bin/env python3
"""
Estimate calories for a chosen quantity of food.

Usage:
    portionfit-estimate "1 tranche" --grams 60 --calories 75
    portionfit-estimate --food-id burger-classic --grams 40 --locale en
    portionfit-estimate "330ml" --grams 500 --calories 139 --suggest

Per-unit weights and limits are read from the environment (and from a
local .env file), see portionfit.infrastructure.config.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

import structlog
from dotenv import load_dotenv

from portionfit.application.portion.queries import (
    CalculatePortionQuery,
    CalculatePortionQueryHandler,
    GetSuggestedPortionsQuery,
    GetSuggestedPortionsQueryHandler,
)
from portionfit.domain.nutrition.catalog.models import FoodRecord
from portionfit.domain.nutrition.core.exceptions import NutritionDomainError
from portionfit.domain.shared.types import Grams
from portionfit.infrastructure.catalog.in_memory_food_catalog import create_sample_catalog
from portionfit.infrastructure.config import create_quantity_converter
from portionfit.infrastructure.logging import configure_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portionfit-estimate",
        description="Scale a food's calories to a selected quantity.",
    )
    parser.add_argument(
        "serving",
        nargs="?",
        help='Declared serving, e.g. "100g", "1 tranche", "1 bottle"',
    )
    parser.add_argument("--grams", type=float, required=True, help="Selected quantity in grams")
    parser.add_argument(
        "--calories",
        type=float,
        default=0.0,
        help="kcal for one declared serving (ignored with --food-id)",
    )
    parser.add_argument("--food-id", help="Look the food up in the sample catalog")
    parser.add_argument("--locale", default="fr", choices=["fr", "en"])
    parser.add_argument("--suggest", action="store_true", help="List quick-pick servings")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--json-logs", action="store_true")
    return parser


async def run(args: argparse.Namespace) -> int:
    """Run the estimate and print the result."""
    converter = create_quantity_converter()
    catalog = create_sample_catalog()

    food: Optional[FoodRecord] = None
    if not args.food_id:
        food = FoodRecord(
            food_id="cli",
            name="CLI food",
            calories=args.calories,
            serving_size=args.serving,
        )

    calculation = await CalculatePortionQueryHandler(catalog, converter).handle(
        CalculatePortionQuery(
            selected_grams=Grams(args.grams),
            food_id=args.food_id,
            food=food,
            serving_size_text=args.serving,
            locale=args.locale,
        )
    )

    context = calculation.display_context
    print(f"Food:     {calculation.food.name}")
    print(f"Serving:  {context.serving_description} ({converter.format_for_logging(calculation.serving)})")
    print(f"Quantity: {context.quantity_text}")
    print(f"Ratio:    {calculation.ratio:.2f}")
    print(f"Calories: {calculation.calories:.0f} kcal")

    if args.suggest:
        suggestions = await GetSuggestedPortionsQueryHandler(catalog, converter).handle(
            GetSuggestedPortionsQuery(
                food_id=args.food_id,
                food=food,
                serving_size_text=args.serving,
            )
        )
        print("Suggestions:")
        for serving in suggestions:
            print(f"  - {serving.to_display_string(args.locale)} ({serving.to_grams():g}g)")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the portionfit-estimate command."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.serving and not args.food_id:
        parser.error("a serving or --food-id is required")

    try:
        configure_logging(args.log_level, json=args.json_logs)
        return asyncio.run(run(args))
    except NutritionDomainError as e:
        logger.error("Estimate failed", error=str(e))
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Bad log level, PORTION_* environment value or food data
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
