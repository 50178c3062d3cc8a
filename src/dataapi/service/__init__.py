"""Request execution and the CRUD façade."""

from .executor import RequestExecutor, build_url
from .factory import create_service
from .request import RequestDescriptor, ResponseEnvelope
from .service import Service

__all__ = [
    "RequestDescriptor",
    "ResponseEnvelope",
    "RequestExecutor",
    "Service",
    "build_url",
    "create_service",
]
