"""Adapters (infrastructure) for METRIQ.

Provide concrete implementations of the ports in `metriq.interfaces`
(account and task stores, password hashing, id/token generation, clocks),
plus persistence mapping and related wiring (engines, metadata, migrations).

Dependency rule: may import `metriq.interfaces` and `metriq.domain`; the
domain must not import this package.
"""
