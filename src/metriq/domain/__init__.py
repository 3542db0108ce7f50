"""Domain layer for METRIQ.

Contains the account rules: registration validation, the pure commands that
produce updated account records (client tokens, password recovery, password
changes), the sanitized external view, and the domain error taxonomy. This
package is deliberately technology-agnostic.

Dependency rule: may import `metriq.interfaces` records; do not import from
`metriq.adapters`, `metriq.service_layer` or `metriq.entrypoints`.
"""
