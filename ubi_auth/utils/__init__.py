"""Utility modules."""

from ubi_auth.utils.logger import bind_context, unbind_context, get_logger, mask

__all__ = [
    "get_logger",
    "bind_context",
    "unbind_context",
    "mask",
]
