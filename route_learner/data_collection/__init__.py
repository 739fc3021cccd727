from .trail_sampler import TrailSampler

__all__ = ["RouteGenerator", "InsufficientDataError", "RecorderState", "TrailSampler"]


def __getattr__(name):
    if name in ("RouteGenerator", "InsufficientDataError", "RecorderState"):
        from . import route_generator

        return getattr(route_generator, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
