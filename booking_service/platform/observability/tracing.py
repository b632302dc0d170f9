"""
OpenTelemetry SDK setup.

Spans are opened where the work happens (use cases, the availability RPC,
event publishing, replication message handling) through
``trace.get_tracer(__name__)``. This module only installs the provider and its
exporters at process start and flushes them on shutdown.
"""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from booking_service.platform.config.core_setting import settings
from booking_service.platform.logging.loguru_io import Logger


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str | None = None,
        otlp_endpoint: str | None = None,
        console_export: bool | None = None,
    ) -> None:
        self.service_name = service_name or settings.SERVICE_NAME
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.console_export = (
            settings.OTEL_CONSOLE_EXPORT if console_export is None else console_export
        )
        self.provider: TracerProvider | None = None

    def _span_processors(self) -> list[SpanProcessor]:
        processors: list[SpanProcessor] = []
        if self.otlp_endpoint:
            processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint)))
        if self.console_export:
            processors.append(BatchSpanProcessor(ConsoleSpanExporter()))
        return processors

    def setup(self) -> None:
        """Install the global tracer provider. Call once at process start."""
        self.provider = TracerProvider(
            resource=Resource.create(
                {SERVICE_NAME: self.service_name, SERVICE_VERSION: settings.VERSION}
            )
        )
        processors = self._span_processors()
        for processor in processors:
            self.provider.add_span_processor(processor)
        trace.set_tracer_provider(self.provider)

        if not processors:
            Logger.base.info('[TRACING] No exporter configured, spans stay in-process')

    def shutdown(self) -> None:
        if self.provider is not None:
            self.provider.shutdown()
            self.provider = None
