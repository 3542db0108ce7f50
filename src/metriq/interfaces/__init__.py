"""Interfaces (application boundary) for METRIQ.

Defines framework-free application contracts: ABCs and the small frozen
records shared by the service layer and adapters (account and task stores,
password hashers, ID/token generators, clocks, unit of work). Business rules
stay out of this package.

Dependency rule: this package is independent; do not import from any other
`metriq.*` package. It may be imported by `metriq.domain`,
`metriq.service_layer`, `metriq.adapters`, and `metriq.bootstrap`.
"""
