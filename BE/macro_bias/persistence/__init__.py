from .cache import BiasCache, horizon_key

__all__ = ["BiasCache", "horizon_key"]
