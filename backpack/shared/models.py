"""
Data model shared by the translators, the translate session and the console.
"""

import json
from dataclasses import dataclass, asdict, replace
from enum import Enum


# Source language sentinel asking the service to infer the language
DETECT = "detect"

# Instructional text shown in an empty source field, never submitted
PLACEHOLDER_TEXT = "Enter text"

DEFAULT_SOURCE_LANGUAGE = DETECT
DEFAULT_TARGET_LANGUAGE = "en"

ALERT_TITLE = "Error"


class ErrorKind(str, Enum):
    CONNECTION_FAILED = "connection_failed"
    MISSING_API_KEY = "missing_api_key"

    @property
    def message(self) -> str:
        if self is ErrorKind.MISSING_API_KEY:
            return (
                "Service unavailable.\n"
                "Please contact our support if the problem persists."
            )
        return (
            "Unable to connect to the service.\n"
            "Please check your connection and try again."
        )


class Role(str, Enum):
    SOURCE = "source"
    TARGET = "target"


class FieldState(str, Enum):
    PLACEHOLDER = "placeholder"  # Placeholder text shown
    EDITING = "editing"
    SUBMITTED = "submitted"      # Translation requested


@dataclass(frozen=True)
class LanguageSelection:
    """A language picked by the user, or the detect sentinel."""
    code: str
    display_name: str

    def __post_init__(self):
        if not self.code:
            raise ValueError("Language code must not be empty")

    @property
    def is_detect(self) -> bool:
        return self.code == DETECT


DETECT_LANGUAGE = LanguageSelection(DETECT, "Detect language")
ENGLISH = LanguageSelection(DEFAULT_TARGET_LANGUAGE, "English")


@dataclass(frozen=True)
class TranslationResult:
    """Translation mapped from a provider response."""
    translated_text: str
    detected_source_language_code: str


@dataclass(frozen=True)
class TranslateState:
    """Snapshot of a translate session, handed to the view by value."""
    source: LanguageSelection = DETECT_LANGUAGE
    target: LanguageSelection = ENGLISH
    source_text: str = PLACEHOLDER_TEXT
    target_text: str = ""
    field_state: FieldState = FieldState.PLACEHOLDER
    busy: bool = False
    submit_visible: bool = False
    clear_visible: bool = False

    @property
    def swap_enabled(self) -> bool:
        return not self.source.is_detect

    @property
    def has_submittable_text(self) -> bool:
        return is_submittable(self.source_text) and self.field_state != FieldState.PLACEHOLDER

    def evolve(self, **changes) -> "TranslateState":
        return replace(self, **changes)


def is_submittable(text: str | None) -> bool:
    """Whether text may be sent for translation."""
    if text is None or not text.strip():
        return False
    return text != PLACEHOLDER_TEXT


def encode_result(result: TranslationResult) -> str:
    """Encode a translation result to a JSON string."""
    return json.dumps(asdict(result), ensure_ascii=False)


def decode_result(data: str) -> TranslationResult:
    """Decode a JSON string produced by encode_result."""
    payload = json.loads(data)
    return TranslationResult(
        translated_text=payload["translated_text"],
        detected_source_language_code=payload["detected_source_language_code"],
    )
