from .models import (
    DETECT,
    DETECT_LANGUAGE,
    ENGLISH,
    PLACEHOLDER_TEXT,
    ALERT_TITLE,
    ErrorKind,
    Role,
    FieldState,
    LanguageSelection,
    TranslationResult,
    TranslateState,
    is_submittable,
    encode_result,
    decode_result,
)
from .errors import ServiceError, ConnectionFailed, MissingApiKey

__all__ = [
    "DETECT",
    "DETECT_LANGUAGE",
    "ENGLISH",
    "PLACEHOLDER_TEXT",
    "ALERT_TITLE",
    "ErrorKind",
    "Role",
    "FieldState",
    "LanguageSelection",
    "TranslationResult",
    "TranslateState",
    "is_submittable",
    "encode_result",
    "decode_result",
    "ServiceError",
    "ConnectionFailed",
    "MissingApiKey",
]
