"""Customer registry: customers, phone numbers and services behind a REST API."""

__version__ = "1.0.0"
