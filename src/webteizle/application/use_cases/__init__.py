from .catalog import CatalogUseCase
from .resolve_streams import ResolveStreamsUseCase

__all__ = ["CatalogUseCase", "ResolveStreamsUseCase"]
