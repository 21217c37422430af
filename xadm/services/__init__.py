"""Service layer modules for xadm."""

from .server_lists import ServerListService

__all__ = ["ServerListService"]
