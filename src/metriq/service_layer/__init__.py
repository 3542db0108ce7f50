"""Service layer for METRIQ.

Implements the application use-cases: commands, their handlers, the message
bus that routes them, and the service facades that turn domain errors into
result envelopes. Transaction boundaries live in the handlers.

Dependency rule: may import `metriq.domain` and `metriq.interfaces`, but not
`metriq.adapters` or `metriq.entrypoints`.
"""
