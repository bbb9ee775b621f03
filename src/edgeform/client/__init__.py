"""Collaborators of the form core: transport, session and notifications."""

from edgeform.client.notify import ConsoleNotifier, Notifier, Severity
from edgeform.client.session import SessionState, TokenStore, is_authenticated
from edgeform.client.transport import Err, HttpTransport, Ok, Result, Transport

__all__ = [
    "ConsoleNotifier",
    "Err",
    "HttpTransport",
    "Notifier",
    "Ok",
    "Result",
    "SessionState",
    "Severity",
    "TokenStore",
    "Transport",
    "is_authenticated",
]
