import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundError, ValidationError
from core.pagination import Pagination, get_pagination
from core.responses import api_response
from db.database import get_async_session
from db.inventory.item import InventoryItem as InventoryItemModel
from schemas.inventory import InventoryItemCreate, InventoryItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_item_or_404(db: AsyncSession, item_id: int) -> InventoryItemModel:
    result = await db.execute(select(InventoryItemModel).where(InventoryItemModel.id == item_id))
    item = result.scalar_one_or_none()
    if not item:
        raise NotFoundError("Inventory item not found", field="inventory")
    return item


async def _ensure_name_available(db: AsyncSession, item_name: str, exclude_id: int = None):
    query = select(InventoryItemModel.id).where(InventoryItemModel.item_name == item_name)
    if exclude_id is not None:
        query = query.where(InventoryItemModel.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ValidationError(f"Inventory item {item_name} already exists", field="item_name")


@router.get("")
async def list_inventory(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_async_session),
):
    """List inventory items, optionally filtered by a name substring"""
    query = select(InventoryItemModel)
    if pagination.search:
        query = query.where(pagination.matches(InventoryItemModel.item_name))

    total_items = (
        await db.execute(select(func.count()).select_from(query.subquery()))
    ).scalar_one()
    result = await db.execute(
        query.order_by(InventoryItemModel.id.asc())
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    items = [item.to_schema for item in result.scalars().all()]

    return api_response(
        request,
        pagination.envelope(total_items, "inventory", items),
        message="Inventory retrieved successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    request: Request,
    payload: InventoryItemCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Add an item to the inventory catalog"""
    await _ensure_name_available(db, payload.item_name)

    item = InventoryItemModel(**payload.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)
    logger.info(f"Inventory item {item.item_name} created (id={item.id})")

    return api_response(
        request,
        item.to_schema,
        key="inventory",
        status_code=status.HTTP_201_CREATED,
        message="Inventory item added successfully",
    )


@router.put("/{item_id}")
async def update_inventory_item(
    request: Request,
    item_id: int,
    payload: InventoryItemUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """Update an inventory item; omitted fields keep their value"""
    item = await _get_item_or_404(db, item_id)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "item_name" in changes and changes["item_name"] != item.item_name:
        await _ensure_name_available(db, changes["item_name"], exclude_id=item.id)

    for field, value in changes.items():
        setattr(item, field, value)
    await db.commit()
    await db.refresh(item)

    return api_response(
        request,
        item.to_schema,
        key="inventory",
        message="Inventory item updated successfully",
    )


@router.delete("/{item_id}")
async def delete_inventory_item(
    request: Request,
    item_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Remove an inventory item"""
    item = await _get_item_or_404(db, item_id)
    await db.delete(item)
    await db.commit()
    logger.info(f"Inventory item {item_id} deleted")

    return api_response(request, message="Inventory item deleted successfully")
