from devspace.models.kv_cache import KVCache

__all__ = ["KVCache"]
