import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from plant_identifier.api.routes import router as api_router
from plant_identifier.config import get_settings
from plant_identifier.errors import IdentificationError
from plant_identifier.i18n import get_messages

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Plant Identifier API",
    description="API for plant identification with toxicity and edibility information",
    version="0.1.0",
)

# CORS middleware for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IdentificationError)
async def identification_error_handler(request: Request, exc: IdentificationError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON or wrongly typed fields count as missing input
    logger.warning(f"Invalid request body on {request.url.path}: {[error.get('loc') for error in exc.errors()]}")
    messages = get_messages(settings.LOCALE)
    return JSONResponse(status_code=400, content={"error": messages["error_missing_input"]})


# Include routes
app.include_router(api_router, prefix=settings.API_PREFIX)


# Root endpoint
@app.get("/", tags=["Health"])
async def root():
    return {"message": "Welcome to Plant Identifier API", "status": "active"}


# Custom OpenAPI documentation
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Plant Identifier API",
        version="0.1.0",
        description="Identify plants from photos and learn whether they are toxic or edible",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("plant_identifier.main:app", host="0.0.0.0", port=8000, reload=True)
