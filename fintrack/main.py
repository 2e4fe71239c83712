import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fintrack.config import APP_NAME, APP_VERSION, LOG_LEVEL
from fintrack.errors import GatewayError, NotAuthenticatedError, ValidationError
from fintrack.routes.analytics_routes import router as analytics_router
from fintrack.routes.auth_routes import router as auth_router
from fintrack.routes.budget_routes import router as budget_router
from fintrack.routes.category_routes import router as category_router
from fintrack.routes.goal_routes import router as goal_router
from fintrack.routes.investment_routes import router as investment_router
from fintrack.routes.payment_method_routes import router as payment_method_router
from fintrack.routes.reference_routes import router as reference_router
from fintrack.routes.savings_routes import router as savings_router
from fintrack.routes.tax_routes import router as tax_router
from fintrack.routes.transaction_routes import router as transaction_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)


@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!", "version": APP_VERSION}


# ── Error mapping ─────────────────────────────────────────────────
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.errors})


@app.exception_handler(NotAuthenticatedError)
async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
    return JSONResponse(
        status_code=401,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    # Client errors from the backend (not found, conflict, bad filter) pass through.
    status_code = exc.status_code if exc.status_code and 400 <= exc.status_code < 500 else 502
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


# Configure CORS for the web and mobile clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(transaction_router)
app.include_router(category_router)
app.include_router(payment_method_router)
app.include_router(budget_router)
app.include_router(goal_router)
app.include_router(investment_router)
app.include_router(savings_router)
app.include_router(analytics_router)
app.include_router(tax_router)
app.include_router(reference_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fintrack.main:app", host="0.0.0.0", port=8000, reload=True)
