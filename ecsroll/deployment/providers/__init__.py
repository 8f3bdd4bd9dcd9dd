from ._base import BaseClusterClient
from .amazon_ecs import AmazonECS

__all__ = ["AmazonECS", "BaseClusterClient"]
