"""Protocol definitions for pluggable adapters."""

from .chat import EventCallback, MessagingClient

__all__ = ["EventCallback", "MessagingClient"]
