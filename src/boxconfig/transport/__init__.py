"""Transport layer for boxconfig."""

from boxconfig.transport.http import AsyncHTTPTransport

__all__ = ["AsyncHTTPTransport"]
