import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.costing import catalog_lookup, compute_cogs
from core.errors import NotFoundError
from core.pagination import Pagination, get_pagination
from core.responses import api_response
from db.database import get_async_session
from db.inventory.item import InventoryItem as InventoryItemModel
from db.recipe import Recipe as RecipeModel
from db.sku_sequence import allocate_sku
from schemas.recipe import RecipeInput

logger = logging.getLogger(__name__)

router = APIRouter()


async def _price_recipe(db: AsyncSession, recipe: RecipeInput) -> float:
    """COGS from current inventory prices; raises before anything is written."""
    names = list(recipe.ingredients.keys())
    result = await db.execute(
        select(InventoryItemModel).where(InventoryItemModel.item_name.in_(names))
    )
    lookup = catalog_lookup(result.scalars().all())
    return compute_cogs(recipe.ingredients, recipe.number_of_cups, lookup)


def _ingredients_json(recipe: RecipeInput) -> dict:
    return {name: m.model_dump() for name, m in recipe.ingredients.items()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: Request,
    payload: RecipeInput,
    db: AsyncSession = Depends(get_async_session),
):
    """Create a recipe, computing its COGS and assigning the next SKU of the day"""
    cogs = await _price_recipe(db, payload)

    sku = await allocate_sku(db, datetime.utcnow().date())
    recipe = RecipeModel(
        sku=sku,
        number_of_cups=payload.number_of_cups,
        ingredients=_ingredients_json(payload),
        cogs=cogs,
    )
    db.add(recipe)
    await db.commit()
    logger.info(f"Recipe {sku} created with COGS {cogs}")

    return api_response(
        request,
        recipe.to_summary,
        status_code=status.HTTP_201_CREATED,
        message="Recipe added successfully",
    )


@router.get("")
async def list_recipes(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_async_session),
):
    """List recipes, newest first, optionally filtered by an SKU substring"""
    query = select(RecipeModel)
    if pagination.search:
        query = query.where(pagination.matches(RecipeModel.sku))

    total_items = (
        await db.execute(select(func.count()).select_from(query.subquery()))
    ).scalar_one()
    result = await db.execute(
        query.order_by(RecipeModel.id.desc())
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    recipes = [recipe.to_schema for recipe in result.scalars().all()]

    return api_response(
        request,
        pagination.envelope(total_items, "recipes", recipes),
        message="Recipes retrieved successfully",
    )


@router.put("/{recipe_id}")
async def update_recipe(
    request: Request,
    recipe_id: int,
    payload: RecipeInput,
    db: AsyncSession = Depends(get_async_session),
):
    """Replace a recipe's ingredients and cup count and recompute its COGS; the SKU is kept"""
    result = await db.execute(select(RecipeModel).where(RecipeModel.id == recipe_id))
    recipe = result.scalar_one_or_none()
    if not recipe:
        raise NotFoundError("Recipe not found", field="recipe")

    cogs = await _price_recipe(db, payload)

    recipe.number_of_cups = payload.number_of_cups
    recipe.ingredients = _ingredients_json(payload)
    recipe.cogs = cogs
    await db.commit()
    await db.refresh(recipe)
    logger.info(f"Recipe {recipe.sku} updated with COGS {cogs}")

    return api_response(
        request,
        recipe.to_summary,
        message="Recipe updated successfully",
    )
