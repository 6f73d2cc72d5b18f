"""
Rule evaluation, anomaly detection, scoring and reporting.
"""
