"""Entry points for METRIQ (currently the ``metriq`` command-line interface).

Dependency rule: anything touching accounts or tasks goes through
`metriq.bootstrap` and the service facades; entry points never call
handlers or stores directly.
"""
