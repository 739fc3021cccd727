from .route_shaper import RouteShaper

__all__ = ["RouteShaper"]
