"""Bootstrap (composition root) for METRIQ.

Assembles the application at runtime: wires concrete adapters to the
service-layer handlers, composes the message bus and unit of work, reads
configuration and exposes the service facades to entrypoints.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `metriq.adapters`, `metriq.service_layer`,
  `metriq.interfaces`, `metriq.domain`, and `metriq.config`.
- Inner layers must not import `metriq.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap

__all__ = ["AppContainer", "bootstrap"]
