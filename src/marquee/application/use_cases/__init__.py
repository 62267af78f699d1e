from .catalog_browse import CatalogBrowseUseCase, PageResult
from .query_controller import QueryController
from .source_resolver import SourceResolver, build_embed_url

__all__ = [
    "CatalogBrowseUseCase",
    "PageResult",
    "QueryController",
    "SourceResolver",
    "build_embed_url",
]
