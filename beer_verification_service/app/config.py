# Application Configuration using Pydantic BaseSettings
from pydantic_settings import BaseSettings
from typing import Optional

class AppSettings(BaseSettings):
    # Kafka
    KAFKA_BOOTSTRAP_SERVERS: str = "kafka:29092"
    KAFKA_TOPIC_NAME: str = "beer_verifications" # Topic shared by producer and consumer
    KAFKA_CONSUMER_GROUP_ID: str = "beer_verification_consumer_group"

    # Envelope / message metadata
    MESSAGE_TYPE: str = "foo-message-type"
    MESSAGE_CONTENT_TYPE: str = "application/some-custom-mime-type"

    # Observability
    LOG_LEVEL: str = "INFO"
    OTEL_EXPORTER_OTLP_TRACES_ENDPOINT: Optional[str] = None
    OTEL_EXPORTER_OTLP_METRICS_ENDPOINT: Optional[str] = None
    SERVICE_NAME_API: str = "pact-beer-api-producer"
    SERVICE_NAME_CONSUMER: str = "pact-beer-api-consumer"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

# Instantiate settings to be imported by other modules
settings = AppSettings()

import logging
logger = logging.getLogger(__name__)
logger.info("Application settings module initialized.")
