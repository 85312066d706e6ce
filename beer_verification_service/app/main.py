# FastAPI Application Entry Point for the verification producer
from fastapi import FastAPI

from beer_verification_service.app.config import settings
from beer_verification_service.app.observability import setup_opentelemetry, logger

# Initialize OpenTelemetry
setup_opentelemetry(service_name=settings.SERVICE_NAME_API)

# Import instrumentors after OTel SDK is initialized
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

# Kafka Producer lifecycle
from beer_verification_service.infrastructure.kafka.producer import startup_kafka_producer, shutdown_kafka_producer

# API Routers
from beer_verification_service.app.api.v1.endpoints import health as health_router
from beer_verification_service.app.api.v1.endpoints import verifications as verifications_router

app = FastAPI(
    title="Beer Verification Producer",
    description="Decides beer eligibility by age and publishes the verification envelope to Kafka.",
    version="0.1.0"
)

@app.on_event("startup")
async def startup_event():
    logger.info("FastAPI application startup...")
    try:
        await startup_kafka_producer()
        logger.info("Kafka Producer polling started.")
    except Exception as e:
        logger.error(f"Failed during startup: {e}", exc_info=True)

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("FastAPI application shutdown...")
    await shutdown_kafka_producer()
    logger.info("Kafka Producer shutdown initiated and flushed.")

FastAPIInstrumentor.instrument_app(app)
logger.info("FastAPI instrumentation complete.")

app.include_router(health_router.router)
app.include_router(verifications_router.router, prefix="/api/v1")

logger.info("API routers included. Application setup complete.")

# To run: uvicorn beer_verification_service.app.main:app --reload --port 8000
