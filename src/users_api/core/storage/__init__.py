from .user_store import StoreError, UserStore

__all__ = ["StoreError", "UserStore"]
