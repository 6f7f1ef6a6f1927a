"""
Infrastructure layer - External integrations.

This layer contains integrations with external frameworks and tools.
It depends on both Application and Domain layers.

The FastAPI integration is imported on demand from
``illusion_di.infrastructure.fastapi_integration`` and needs the ``fastapi`` extra.
"""

from . import testing

__all__ = [
    "testing",
]
