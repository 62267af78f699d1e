from .cache import CachePort
from .catalog import CatalogClientPort

__all__ = [
    "CachePort",
    "CatalogClientPort",
]
