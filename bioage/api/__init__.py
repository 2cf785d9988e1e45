"""API package for the workflow HTTP surface."""

from .application import create_api_application

__all__ = ["create_api_application"]
