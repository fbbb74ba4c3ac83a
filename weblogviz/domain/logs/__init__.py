from .index import LogIndex

__all__ = ["LogIndex"]
