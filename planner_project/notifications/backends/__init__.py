"""
Delivery backends.

Both expose one call that reports success as a bool:
- InAppAlertBackend.deliver(title, body, key=None)
- EmailBackend.send(to, subject, html)
"""

from .alerts import InAppAlertBackend
from .email import EmailBackend

__all__ = [
    "EmailBackend",
    "InAppAlertBackend",
]
