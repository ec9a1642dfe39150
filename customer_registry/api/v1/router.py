from fastapi import APIRouter

from customer_registry.api.v1.endpoints import (
    customers,
    phones,
    services,
    sheets,
)

api_router_v1 = APIRouter()

api_router_v1.include_router(customers.router, prefix="/customers", tags=["Customers"])
api_router_v1.include_router(phones.router, prefix="/phones", tags=["Phone numbers"])
api_router_v1.include_router(services.router, prefix="/services", tags=["Services"])
api_router_v1.include_router(sheets.router, prefix="/sheets", tags=["Google Sheets"])
