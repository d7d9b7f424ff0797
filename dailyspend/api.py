"""
HTTP transport for Daily Spends.

A thin FastAPI layer over ExpenseTracker. Routes only translate query
strings and JSON bodies into tracker calls; all behavior lives in the
tracker and the store.

Missing required query parameters answer 400 with a message rather than
FastAPI's default 422, so clients see one error shape for bad input.
"""

from typing import Optional

import structlog
import uvicorn
from fastapi import APIRouter, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from dailyspend import __version__
from dailyspend.config import get_settings
from dailyspend.errors import StorageError, TransferError, ValidationError
from dailyspend.models.records import CategoryCreate, ExpenseCreate
from dailyspend.services.transfer import export_filename
from dailyspend.tracker import ExpenseTracker, create_app_components


logger = structlog.get_logger(__name__)


def _bad_request(message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message, **extra},
    )


def _dump(records) -> list[dict]:
    return [r.model_dump(mode="json", by_alias=True) for r in records]


def create_api(tracker: ExpenseTracker) -> FastAPI:
    """Build the FastAPI application serving one tracker."""
    app = FastAPI(
        title="Daily Spends API",
        version=__version__,
        openapi_tags=[
            {"name": "categories", "description": "Category management"},
            {"name": "expenses", "description": "Expense entry and listing"},
            {"name": "analytics", "description": "Derived totals"},
            {"name": "transfer", "description": "CSV export and import"},
        ],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _bad_request(exc.message, field=exc.field)

    @app.exception_handler(TransferError)
    async def transfer_error_handler(request: Request, exc: TransferError):
        return _bad_request(str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
        return _bad_request("Invalid request data", errors=errors)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("storage_failure", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Storage failure"},
        )

    app.include_router(_categories_router(tracker), prefix="/api")
    app.include_router(_expenses_router(tracker), prefix="/api")
    app.include_router(_analytics_router(tracker), prefix="/api")
    app.include_router(_transfer_router(tracker), prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "healthy", "version": __version__}

    return app


# =============================================================================
# ROUTERS
# =============================================================================

def _categories_router(tracker: ExpenseTracker) -> APIRouter:
    router = APIRouter(prefix="/categories", tags=["categories"])

    @router.get("")
    def read_categories():
        return _dump(tracker.list_categories())

    @router.post("")
    def create_category(cat_in: CategoryCreate):
        category = tracker.create_category(cat_in.name, cat_in.color)
        return category.model_dump(mode="json", by_alias=True)

    @router.delete("/{category_id}")
    def delete_category(category_id: str):
        tracker.delete_category(category_id)
        return {"success": True}

    return router


def _expenses_router(tracker: ExpenseTracker) -> APIRouter:
    router = APIRouter(prefix="/expenses", tags=["expenses"])

    @router.get("")
    def read_expenses(
        date: Optional[str] = None,
        start_date: Optional[str] = Query(default=None, alias="startDate"),
        end_date: Optional[str] = Query(default=None, alias="endDate"),
    ):
        return _dump(tracker.list_expenses(date=date, start_date=start_date, end_date=end_date))

    @router.post("")
    def create_expense(expense_in: ExpenseCreate):
        expense = tracker.create_expense(
            name=expense_in.name,
            amount=expense_in.amount,
            date=expense_in.date,
            details=expense_in.details,
            category_id=expense_in.category_id,
        )
        return expense.model_dump(mode="json", by_alias=True)

    @router.delete("/{expense_id}")
    def delete_expense(expense_id: str):
        tracker.delete_expense(expense_id)
        return {"success": True}

    return router


def _analytics_router(tracker: ExpenseTracker) -> APIRouter:
    router = APIRouter(prefix="/analytics", tags=["analytics"])

    @router.get("/daily-total")
    def daily_total(date: Optional[str] = None):
        if not date:
            return _bad_request("Date parameter required")
        return {"total": float(tracker.daily_total(date))}

    @router.get("/category-totals")
    def category_totals(date: Optional[str] = None):
        if not date:
            return _bad_request("Date parameter required")
        return _dump(tracker.category_totals(date))

    @router.get("/monthly-totals")
    def monthly_totals(year: Optional[int] = None, month: Optional[int] = None):
        if not year or not month:
            return _bad_request("Year and month parameters required")
        if not 1 <= month <= 12:
            return _bad_request("Month must be between 1 and 12")
        return _dump(tracker.monthly_totals(year, month))

    @router.get("/weekly-totals")
    def weekly_totals(date: Optional[str] = None):
        if not date:
            return _bad_request("Date parameter required")
        return _dump(tracker.weekly_totals(date))

    @router.get("/monthly-summary")
    def monthly_summary(year: Optional[int] = None, month: Optional[int] = None):
        if not year or not month:
            return _bad_request("Year and month parameters required")
        if not 1 <= month <= 12:
            return _bad_request("Month must be between 1 and 12")
        return tracker.monthly_summary(year, month).model_dump(mode="json", by_alias=True)

    return router


def _transfer_router(tracker: ExpenseTracker) -> APIRouter:
    router = APIRouter(tags=["transfer"])

    @router.get("/export.csv")
    def export_data():
        return PlainTextResponse(
            tracker.export_csv(),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
        )

    @router.post("/import")
    async def import_data(request: Request):
        body = await request.body()
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            return _bad_request("CSV must be UTF-8 encoded")
        categories, expenses = tracker.import_csv(text)
        return {"categories": categories, "expenses": expenses}

    return router


def main() -> None:
    """Run the API with uvicorn using configured host and port."""
    tracker, _ = create_app_components()
    app_settings = get_settings().app
    uvicorn.run(create_api(tracker), host=app_settings.api_host, port=app_settings.api_port)


if __name__ == "__main__":
    main()
