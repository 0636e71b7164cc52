"""Telemetry configuration loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field

from .logger import init_logging
from .metrics import init_metrics
from .tracer import init_tracing

_TRUTHY = {"1", "true", "yes", "on"}

_FLAG_VARIABLES = {
    "enable_tracing": ("ARMADA_ENABLE_TRACING", "OTEL_TRACES_ENABLED"),
    "enable_metrics": ("ARMADA_ENABLE_METRICS", "OTEL_METRICS_ENABLED"),
    "enable_logging": ("ARMADA_ENABLE_LOGGING", "OTEL_LOGS_ENABLED"),
}

_ENDPOINT_VARIABLES = {
    "otlp_traces_endpoint": ("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "v1/traces"),
    "otlp_metrics_endpoint": ("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT", "v1/metrics"),
    "otlp_logs_endpoint": ("OTEL_EXPORTER_OTLP_LOGS_ENDPOINT", "v1/logs"),
}

_ENDPOINT_SWITCHES = {
    "otlp_traces_endpoint": "enable_tracing",
    "otlp_metrics_endpoint": "enable_metrics",
    "otlp_logs_endpoint": "enable_logging",
}


class TelemetryConfig(BaseModel):
    """Which telemetry signals to export, and where."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    service_name: str = "armada"
    service_namespace: str = "console"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    def resource(self) -> dict[str, str]:
        """Attributes describing this service on every exported signal."""
        attributes = {
            "service.name": self.service_name,
            "service.namespace": self.service_namespace,
        }
        attributes.update(self.resource_attributes)
        return attributes

    @classmethod
    def from_env(cls, **overrides: Any) -> "TelemetryConfig":
        """Build a config from `ARMADA_*` and `OTEL_*` variables.

        Enable flags from the environment beat keyword overrides, while an
        endpoint passed as an override beats the environment. An exporter is
        switched on whenever its endpoint is set.
        """
        data: Dict[str, Any] = cls().model_dump()
        data.update(overrides)

        for field, names in _FLAG_VARIABLES.items():
            flag = _flag_from_env(names)
            if flag is not None:
                data[field] = flag

        base_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        for field, (name, suffix) in _ENDPOINT_VARIABLES.items():
            endpoint = os.getenv(name) or _join_endpoint(base_endpoint, suffix)
            if endpoint and not data.get(field):
                data[field] = endpoint

        if os.getenv("OTEL_SERVICE_NAME"):
            data["service_name"] = os.environ["OTEL_SERVICE_NAME"]
        if os.getenv("OTEL_SERVICE_NAMESPACE"):
            data["service_namespace"] = os.environ["OTEL_SERVICE_NAMESPACE"]

        resource_env = os.getenv("OTEL_RESOURCE_ATTRIBUTES")
        if resource_env:
            data["resource_attributes"] = {
                **data.get("resource_attributes", {}),
                **_parse_resource_attributes(resource_env),
            }

        for endpoint_field, switch in _ENDPOINT_SWITCHES.items():
            if data.get(endpoint_field):
                data[switch] = True

        return cls(**data)


def _flag_from_env(names: tuple[str, ...]) -> bool | None:
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value.strip().lower() in _TRUTHY
    return None


def _join_endpoint(base: str | None, suffix: str) -> str | None:
    if not base:
        return None
    return f"{base.rstrip('/')}/{suffix}"


def _parse_resource_attributes(raw: str) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for part in raw.split(","):
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        attributes[key.strip()] = value.strip()
    return attributes


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Read the environment once and reuse the result."""
    return TelemetryConfig.from_env()


def init_telemetry(config: TelemetryConfig | None = None) -> TelemetryConfig:
    """Initialise whichever telemetry subsystems the config enables."""
    resolved = config or load_telemetry_config()

    if resolved.enable_tracing:
        init_tracing(resolved)
    if resolved.enable_metrics:
        init_metrics(resolved)
    if resolved.enable_logging:
        init_logging(resolved)
    return resolved
