from beer_verification_service.app.config import settings
import logging
from typing import List, Optional, Tuple
from opentelemetry import trace, metrics
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader, ConsoleMetricExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME as ResourceAttributesServiceName
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from pythonjsonlogger import jsonlogger
from opentelemetry.context import Context
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator


logger = logging.getLogger("beer_verification_service")

def setup_json_logging():
    root_logger = logging.getLogger()
    if any(isinstance(h.formatter, jsonlogger.JsonFormatter) for h in root_logger.handlers):
        return
    logHandler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(lineno)d %(otelTraceID)s %(otelSpanID)s %(message)s",
        rename_fields={"levelname": "level", "name": "logger_name", "asctime": "timestamp"},
    )
    logHandler.setFormatter(formatter)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(logHandler)
    log_level = settings.LOG_LEVEL.upper()
    root_logger.setLevel(log_level)
    logger.setLevel(log_level)
    logger.info(f"JSON logging configured at level {log_level}.")

def setup_opentelemetry(service_name: str):
    resource = Resource(attributes={
        ResourceAttributesServiceName: service_name,
    })
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    if settings.OTEL_EXPORTER_OTLP_TRACES_ENDPOINT:
        logger.info(f"Configuring OTLP Span Exporter. Endpoint: {settings.OTEL_EXPORTER_OTLP_TRACES_ENDPOINT}")
        otlp_span_exporter = OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_TRACES_ENDPOINT, insecure=True)
        tracer_provider.add_span_processor(BatchSpanProcessor(otlp_span_exporter))
    else:
        logger.info("OTLP Span Exporter not configured. Using Console for spans.")
    trace.set_tracer_provider(tracer_provider)
    logger.info(f"OpenTelemetry TracerProvider configured for service: {service_name}.")

    metric_readers = [PeriodicExportingMetricReader(ConsoleMetricExporter(), export_interval_millis=5000)]
    if settings.OTEL_EXPORTER_OTLP_METRICS_ENDPOINT:
        logger.info(f"Configuring OTLP Metric Exporter. Endpoint: {settings.OTEL_EXPORTER_OTLP_METRICS_ENDPOINT}")
        otlp_metric_exporter = OTLPMetricExporter(endpoint=settings.OTEL_EXPORTER_OTLP_METRICS_ENDPOINT, insecure=True)
        metric_readers.append(PeriodicExportingMetricReader(otlp_metric_exporter, export_interval_millis=5000))
    else:
        logger.info("OTLP Metric Exporter not configured. Using Console for metrics.")
    meter_provider = MeterProvider(resource=resource, metric_readers=metric_readers)
    metrics.set_meter_provider(meter_provider)
    logger.info(f"OpenTelemetry MeterProvider configured for service: {service_name}.")

# Call at module load time
setup_json_logging()

# --- Tracer and Meter instances ---
# Entry points call setup_opentelemetry; modules import these proxies.
tracer = trace.get_tracer("beer_verification_service.tracer")
meter = metrics.get_meter("beer_verification_service.meter")

# --- Custom Metrics Definitions ---
verifications_published_counter = meter.create_counter(
    name="beer_verification.verifications.published.total",
    description="Counts verification envelopes published, partitioned by status.",
    unit="1"
)

kafka_messages_consumed_counter = meter.create_counter(
    name="beer_verification.kafka.messages.consumed.total",
    description="Counts the total number of Kafka messages consumed.",
    unit="1"
)

decode_failures_counter = meter.create_counter(
    name="beer_verification.decode.failures.total",
    description="Counts envelopes or payloads rejected by the decoder.",
    unit="1"
)
logger.info("Custom metrics (Counters) defined in observability.py.")

# --- Kafka Trace Context Propagation ---
def inject_trace_context_into_kafka_headers(headers: Optional[List[Tuple[str, bytes]]] = None) -> List[Tuple[str, bytes]]:
    """
    Appends the current OpenTelemetry trace context to a list of Kafka headers.
    Args:
        headers: Existing (key, value_bytes) header tuples, left untouched.
    Returns:
        A new header list including traceparent/tracestate when a span is active.
    """
    carrier = {}
    TraceContextTextMapPropagator().inject(carrier)
    return list(headers or []) + [(key, value.encode('utf-8')) for key, value in carrier.items()]

def extract_trace_context_from_kafka_headers(headers: list) -> Optional[Context]:
    """
    Extracts OpenTelemetry trace context from Kafka message headers.
    Args:
        headers: A list of tuples (key, value_bytes) from Kafka message.
    Returns:
        An OpenTelemetry Context object, potentially with parent span info.
    """
    if not headers:
        return None

    header_dict = {key: value.decode('utf-8') for key, value in headers if value is not None}
    return TraceContextTextMapPropagator().extract(carrier=header_dict)
