"""Runtime state, configuration, metrics and exceptions."""

from lightrender.runtime.config import RenderConfig
from lightrender.runtime.core import Runtime, get_runtime, reset_runtime
from lightrender.runtime.exceptions import (
    BuilderResultError,
    ClientSourceError,
    ErrorCode,
    InvalidTagError,
    LightRenderError,
    RouteDescriptorError,
    SourceDeniedError,
    SourceTooLargeError,
    StructuralError,
)
from lightrender.runtime.metrics import MetricsRecorder

__all__ = [
    "BuilderResultError",
    "ClientSourceError",
    "ErrorCode",
    "InvalidTagError",
    "LightRenderError",
    "MetricsRecorder",
    "RenderConfig",
    "RouteDescriptorError",
    "Runtime",
    "SourceDeniedError",
    "SourceTooLargeError",
    "StructuralError",
    "get_runtime",
    "reset_runtime",
]
