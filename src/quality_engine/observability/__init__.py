"""
Logging and Prometheus instrumentation for the quality engine.
"""
