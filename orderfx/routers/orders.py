from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request

from orderfx.core.config import Settings
from orderfx.db.dal import Database
from orderfx.models.order import OrderIn, OrderOut, OrderUpdateIn
from orderfx.services.order_service import OrderService
from orderfx.services.rates import CurrencyApiClient, RateResolver

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])

# Dependencies -----------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path)


def get_rate_resolver(settings: Settings = Depends(get_app_settings)) -> RateResolver:
    client = CurrencyApiClient(
        base_url=settings.currency_api_base_url,
        timeout=settings.http_timeout_seconds,
    )
    return RateResolver(client, settings.access_key)


def get_order_service(
    db: Database = Depends(get_db),
    rate_resolver: RateResolver = Depends(get_rate_resolver),
) -> OrderService:
    return OrderService(db, rate_resolver)


# Routes -----------------------------------------------------------
# Sync handlers: FastAPI runs them in its threadpool, so the blocking quote
# request does not stall the event loop.
@router.get("", response_model=List[OrderOut], summary="List all orders")
def list_orders(svc: OrderService = Depends(get_order_service)):
    return svc.retrieve_order_list()


@router.get(
    "/{order_id}",
    response_model=OrderOut,
    summary="Retrieve an order, optionally converted to another currency",
)
def get_order(
    order_id: int = Path(..., description="Order identifier"),
    currency: Optional[str] = Query(
        None,
        min_length=1,
        description="Display currency (e.g. EUR); prices are converted from USD",
    ),
    svc: OrderService = Depends(get_order_service),
):
    return svc.retrieve_order_detail_by_id(order_id, currency)


@router.put("", response_model=OrderOut, summary="Replace an order")
def update_order(payload: OrderIn, svc: OrderService = Depends(get_order_service)):
    return svc.update_order(payload)


@router.put(
    "/{order_id}", response_model=OrderOut, summary="Update an order's prices (partial)"
)
def update_order_by_id(
    order_id: int,
    payload: OrderUpdateIn,
    svc: OrderService = Depends(get_order_service),
):
    return svc.update_order_by_id(order_id, payload)
