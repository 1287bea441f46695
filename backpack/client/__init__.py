from .session import TranslateSession, TranslateView

__all__ = ["TranslateSession", "TranslateView"]
