from typing import Optional

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import get_db, serialize
from schemas import OrderCreate, OrderStatus, OrderStatusUpdate, OrderUpdate
from services import orders_service

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
def list_orders(
    status: Optional[OrderStatus] = None,
    outlet: Optional[str] = None,
    db: Database = Depends(get_db),
):
    return {"orders": serialize(orders_service.list_orders(db, status=status, outlet=outlet))}


@router.get("/{order_id}")
def get_order(order_id: str, db: Database = Depends(get_db)):
    return {"order": serialize(orders_service.get_order(db, order_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
def place_order(body: OrderCreate, db: Database = Depends(get_db)):
    """Checkout. Prices and names always come from the stored menu items."""
    return {"order": serialize(orders_service.create_order(db, body))}


@router.put("/{order_id}")
def update_order(order_id: str, body: OrderUpdate, db: Database = Depends(get_db)):
    return {"order": serialize(orders_service.update_order(db, order_id, body))}


@router.patch("/{order_id}/status")
def update_order_status(order_id: str, body: OrderStatusUpdate, db: Database = Depends(get_db)):
    return {"order": serialize(orders_service.update_order_status(db, order_id, body.status))}


@router.delete("/{order_id}")
def delete_order(order_id: str, db: Database = Depends(get_db)):
    orders_service.delete_order(db, order_id)
    return {"message": "Order deleted successfully"}
