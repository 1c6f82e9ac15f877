from fastapi import FastAPI

from dealer_credit.entrypoints.http.exception_handlers import register_exception_handlers
from dealer_credit.entrypoints.http.routes.banks import router as banks_router
from dealer_credit.entrypoints.http.routes.credit import router as credit_router
from dealer_credit.entrypoints.http.routes.health import router as health_router
from dealer_credit.infra.config import log_level
from dealer_credit.infra.logging import configure_logging


def build_app() -> FastAPI:
    configure_logging(log_level())

    app = FastAPI(
        title="Dealer Credit API",
        description="""
        Automotive credit quoting for dealership staff.

        ## Features
        - Quote a vehicle credit with one bank (payment, schedule, totals, rating)
        - Compare the same credit across banks, cheapest first
        - Project the credit's evolution against vehicle depreciation
        - Export the amortization schedule as formatted table rows

        ## Authentication
        Handled by the API gateway in front of this service.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        contact={
            "name": "Dealer Credit Team",
            "email": "dev@dealer-credit.mx",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(banks_router, prefix="/v1")
    app.include_router(credit_router, prefix="/v1")

    return app


app = build_app()
