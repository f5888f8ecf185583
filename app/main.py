"""
FastAPI main application.

Entry point for the Guda wallet backend.
"""

from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager
from app.config import settings
from app.config.database import connect_to_mongodb, close_mongodb_connection
from app.core.responses import error_json_response
from app.shared.exceptions import AppException
from app.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting application...")

    try:
        await connect_to_mongodb()

        Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

        logger.info("Application started successfully")
    except Exception as e:
        logger.error(f"Failed to start application: {str(e)}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down application...")

    try:
        await close_mongodb_connection()
        logger.info("Application shut down successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}")


# API Description
API_DESCRIPTION = """
## Guda Wallet API

REST API for a wallet-authenticated marketplace: users and admins, KYC
documents, contacts, transaction history and UI themes.

### Authentication

There are no tokens and no sessions. A privileged request carries:
1. `walletAddress`: the caller's Ethereum address
2. `signature`: the caller's `personal_sign` signature over the challenge
   message returned by `GET /api/auth/challenge`

JSON endpoints take both fields in the body, GET endpoints in the query
string and upload endpoints as multipart form fields. The server recovers
the signer, compares it to `walletAddress` (case-insensitive) and loads the
admin or user owning that address.

| Failure | Status |
|---|---|
| walletAddress or signature missing | 400 |
| signature not made by walletAddress | 403 |
| no admin/user with that address | 404 |

### Response Format

**Success Response:**
```json
{
  "status_code": 200,
  "message": "Operation successful",
  "data": { ... },
  "error": null
}
```

**Error Response:**
```json
{
  "status_code": 403,
  "message": "Signature verification failed!",
  "data": null,
  "error": {
    "code": "SIGNATURE_MISMATCH",
    "message": "Signature verification failed!"
  }
}
```
"""

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME if settings else "Guda Wallet Backend",
    version=settings.APP_VERSION if settings else "1.0.0",
    description=API_DESCRIPTION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS if settings else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Render domain errors in the standard envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")

    return error_json_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.code,
        error_message=exc.message
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request shape is a 400, not FastAPI's default 422."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path} validation failed: {details}")

    return error_json_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        error_code="VALIDATION_FAILED",
        error_message=details
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything unexpected becomes a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")

    return error_json_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Internal Server Error",
        error_code="INTERNAL_SERVER_ERROR",
        error_message="An unexpected error occurred"
    )


# Include routers
from app.modules.auth.router import router as auth_router
from app.modules.admins.router import router as admins_router
from app.modules.users.router import router as users_router
from app.modules.transactions.router import router as transactions_router
from app.modules.contacts.router import router as contacts_router
from app.modules.themes.router import router as themes_router

app.include_router(auth_router, prefix="/api")
app.include_router(admins_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")
app.include_router(contacts_router, prefix="/api")
app.include_router(themes_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME if settings else "Guda Wallet Backend",
        "version": settings.APP_VERSION if settings else "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME if settings else "Guda Wallet Backend",
        "version": settings.APP_VERSION if settings else "1.0.0"
    }


# Custom OpenAPI schema
def custom_openapi():
    """
    Generate custom OpenAPI schema with tag descriptions.

    Returns:
        dict: OpenAPI schema
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    openapi_schema["tags"] = [
        {
            "name": "Authentication",
            "description": "Challenge message and wallet-signature checks for users and admins."
        },
        {
            "name": "Admins",
            "description": "Admin management plus admin-only operations on users: KYC approval, listing, deletion and transaction statistics."
        },
        {
            "name": "Users",
            "description": "User registration, profile, profile picture and encrypted KYC documents."
        },
        {
            "name": "Transactions",
            "description": "Transaction history embedded in user records."
        },
        {
            "name": "Contacts",
            "description": "Per-wallet address book with favorites."
        },
        {
            "name": "Themes",
            "description": "UI theme (CSS property) records. Reads are public, changes need an admin signature."
        }
    ]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


# Set custom OpenAPI
app.openapi = custom_openapi


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST if settings else "0.0.0.0",
        port=settings.PORT if settings else 3000,
        reload=bool(settings and settings.DEBUG),
    )
