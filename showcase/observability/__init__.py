"""Request annotation and logging helpers.

Request IDs + structlog contextvars, plus the timing headers every showcase
response carries.
"""
