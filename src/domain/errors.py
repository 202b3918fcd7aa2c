"""
Domain Errors

Faults raised by domain services. Expected business failures are returned
as ``libs.result.Error`` values instead.
"""


class HashingError(Exception):
    """The password hashing library failed on otherwise valid input."""
