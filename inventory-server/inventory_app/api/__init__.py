from fastapi import APIRouter

from inventory_app.interfaces.http.routers import (
    assets,
    audits,
    auth,
    borrow_requests,
    categories,
    notifications,
    reports,
    transactions,
)


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(categories.router, prefix="/categories", tags=["categories"])
    router.include_router(assets.router, prefix="/assets", tags=["assets"])
    router.include_router(borrow_requests.router, prefix="/borrow-requests", tags=["borrow requests"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(audits.router, prefix="/audits", tags=["audits"])
    router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
    router.include_router(reports.router, prefix="/reports", tags=["reports"])
    return router


__all__ = [
    "create_api_router",
]
