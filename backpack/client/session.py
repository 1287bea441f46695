"""
Translate session: source/target selection, the source text field and the
round trip to a translator.

The session owns a TranslateState snapshot and pushes every new snapshot to a
view. It never touches I/O itself other than awaiting the translator.
"""

import asyncio
import logging
from typing import Callable

from backpack.shared.errors import ServiceError
from backpack.shared.locale import localized_name as babel_localized_name
from backpack.shared.models import (
    DETECT,
    ErrorKind,
    FieldState,
    LanguageSelection,
    PLACEHOLDER_TEXT,
    Role,
    TranslateState,
    TranslationResult,
)
from backpack.translators.base import Translator


logger = logging.getLogger(__name__)


class TranslateView:
    """Callbacks a session notifies. Subclass and override what you need."""

    def render(self, state: TranslateState) -> None:
        pass

    def show_alert(self, kind: ErrorKind) -> None:
        pass


class TranslateSession:
    """Language selector and translation requester glue."""

    def __init__(
        self,
        translator: Translator,
        view: TranslateView | None = None,
        localized_name: Callable[[str], str] = babel_localized_name,
        state: TranslateState | None = None,
    ):
        self.translator = translator
        self.view = view or TranslateView()
        self.localized_name = localized_name

        self._state = state or TranslateState()
        # Bumped per request and on clear or swap; older responses are dropped
        self._generation = 0

    @property
    def state(self) -> TranslateState:
        return self._state

    def _update(self, **changes) -> TranslateState:
        self._state = self._state.evolve(**changes)
        self.view.render(self._state)
        return self._state

    # ------------------------------------------------------------------ #
    # Text field
    # ------------------------------------------------------------------ #

    def begin_editing(self) -> None:
        """Focus the source field, dropping the placeholder if shown."""
        if self._state.field_state == FieldState.PLACEHOLDER:
            self._update(
                source_text="",
                field_state=FieldState.EDITING,
                clear_visible=True,
                submit_visible=True,
            )

    def edit(self, text: str) -> None:
        """Replace the source text as typed by the user."""
        self.begin_editing()
        self._update(
            source_text=text,
            field_state=FieldState.EDITING,
            submit_visible=True,
        )

    def _supersede(self) -> None:
        """Drop whatever request is in flight."""
        self._generation += 1

    def clear(self) -> None:
        """Reset the source field to the placeholder and empty the target."""
        self._supersede()
        self._update(
            busy=False,
            source_text=PLACEHOLDER_TEXT,
            target_text="",
            field_state=FieldState.PLACEHOLDER,
            clear_visible=False,
            submit_visible=False,
        )

    async def submit(self) -> TranslationResult | None:
        """
        Translate the current source text.

        Returns the result once rendered, or None when the text was rejected
        locally, the request failed, or a newer request superseded it.
        """
        if not self._state.has_submittable_text:
            logger.debug("Rejected submission of empty or placeholder text")
            return None

        self._generation += 1
        generation = self._generation
        source = self._state.source
        target = self._state.target
        text = self._state.source_text

        self._update(field_state=FieldState.SUBMITTED, submit_visible=False, busy=True)

        try:
            result = await self.translator.translate(text, target.code, source.code)
        except ServiceError as e:
            if generation != self._generation:
                logger.info("Ignoring failure of superseded request %d: %s", generation, e)
                return None
            logger.warning("Translation failed: %s", e)
            self._update(busy=False)
            self.view.show_alert(e.kind)
            return None

        if generation != self._generation:
            logger.info("Dropping response of superseded request %d", generation)
            return None

        changes = {"target_text": result.translated_text, "busy": False}
        if source.is_detect:
            detected = result.detected_source_language_code
            changes["source"] = LanguageSelection(detected, self.localized_name(detected))
        self._update(**changes)
        return result

    # ------------------------------------------------------------------ #
    # Language selection
    # ------------------------------------------------------------------ #

    def select(self, role: Role, language: LanguageSelection) -> asyncio.Task | None:
        """
        Store the selection for role.

        When the code changed and there is text to translate, a new
        translation is scheduled on the running loop and its task returned.

        Raises:
            ValueError: If "detect" is selected as target
            RuntimeError: If a translation is due but no event loop is
                running; the selection is left unchanged
        """
        if role == Role.TARGET and language.code == DETECT:
            raise ValueError("Target language cannot be 'detect'")

        previous = self._state.source if role == Role.SOURCE else self._state.target
        retranslate = language.code != previous.code and self._state.has_submittable_text
        loop = asyncio.get_running_loop() if retranslate else None

        self._update(**{role.value: language})

        if retranslate:
            logger.debug("%s language changed to %s, translating again", role.value, language.code)
            return loop.create_task(self.submit())
        return None

    def swap(self) -> bool:
        """
        Exchange source and target languages and texts.

        A no-op returning False while the source is "detect".
        """
        state = self._state
        if not state.swap_enabled:
            return False

        self._supersede()
        changes = {"source": state.target, "target": state.source, "busy": False}
        if state.field_state != FieldState.PLACEHOLDER:
            changes["source_text"] = state.target_text
            changes["target_text"] = state.source_text
        self._update(**changes)
        return True
