"""The ``metriq`` command-line interface."""
