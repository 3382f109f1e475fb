from .header import AppTitle

__all__ = ["AppTitle"]
