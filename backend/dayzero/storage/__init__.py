"""
Storage module - durable key-value store abstraction
"""
from .kv_store import KeyValueStore, InMemoryStore, JSONFileStore

__all__ = ["KeyValueStore", "InMemoryStore", "JSONFileStore"]
