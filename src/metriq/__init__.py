"""METRIQ accounts

The user-account service of the METRIQ backend: registration, login,
sanitized profile reads, deletion, password recovery and the tasks a user
follows. Results are returned as success/failure envelopes rather than
raised for expected failures.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
