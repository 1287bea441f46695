import asyncio

import pytest

from backpack.client.session import TranslateSession, TranslateView
from backpack.shared.errors import ConnectionFailed
from backpack.shared.models import (
    DETECT_LANGUAGE,
    ErrorKind,
    FieldState,
    LanguageSelection,
    PLACEHOLDER_TEXT,
    Role,
    TranslateState,
    TranslationResult,
)


FRENCH = LanguageSelection("fr", "French")
GERMAN = LanguageSelection("de", "German")
ENGLISH = LanguageSelection("en", "English")


@pytest.fixture
def session(translator, view, fake_name):
    return TranslateSession(translator, view, localized_name=fake_name)


def test_initial_state(session):
    state = session.state
    assert state.source == DETECT_LANGUAGE
    assert state.target.code == "en"
    assert state.source_text == PLACEHOLDER_TEXT
    assert state.field_state == FieldState.PLACEHOLDER
    assert not state.swap_enabled


@pytest.mark.asyncio
async def test_submit_translates_and_records_detected_language(session, translator, view):
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")

    result = await session.submit()

    assert result == TranslationResult("Bonjour", "en")
    assert translator.calls == [("Hello", "fr", "detect")]
    state = session.state
    assert state.target_text == "Bonjour"
    assert state.source == ENGLISH
    assert state.field_state == FieldState.SUBMITTED
    assert not state.busy
    assert not state.submit_visible
    assert state.swap_enabled
    assert any(s.busy for s in view.states)


@pytest.mark.asyncio
async def test_placeholder_is_not_submitted(session, translator):
    assert await session.submit() is None
    assert translator.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", PLACEHOLDER_TEXT])
async def test_empty_text_is_not_submitted(session, translator, text):
    session.edit(text)

    assert await session.submit() is None
    assert translator.calls == []


@pytest.mark.asyncio
async def test_failure_shows_single_alert_and_keeps_target(view, make_translator, fake_name):
    def fail(text, target, source):
        raise ConnectionFailed("HTTP 500")

    state = TranslateState(
        target=FRENCH,
        source_text="Hello",
        target_text="Salut",
        field_state=FieldState.EDITING,
    )
    session = TranslateSession(make_translator(fail), view, localized_name=fake_name, state=state)

    assert await session.submit() is None

    assert view.alerts == [ErrorKind.CONNECTION_FAILED]
    assert session.state.target_text == "Salut"
    assert not session.state.busy


@pytest.mark.asyncio
async def test_edit_after_submit_returns_to_editing(session):
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")
    await session.submit()

    session.edit("Hello there")

    assert session.state.field_state == FieldState.EDITING
    assert session.state.submit_visible


@pytest.mark.asyncio
async def test_target_change_triggers_translation(session, translator):
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")
    await session.submit()

    task = session.select(Role.TARGET, GERMAN)

    assert task is not None
    await task
    assert session.state.target_text == "Hallo"
    assert translator.calls[-1] == ("Hello", "de", "en")


@pytest.mark.asyncio
async def test_source_change_triggers_translation(session, translator):
    session.select(Role.TARGET, ENGLISH)
    session.edit("Bonjour")

    task = session.select(Role.SOURCE, FRENCH)

    await task
    assert translator.calls == [("Bonjour", "en", "fr")]
    assert session.state.source == FRENCH


@pytest.mark.asyncio
async def test_same_language_does_not_translate(session, translator):
    session.edit("Hello")

    assert session.select(Role.TARGET, LanguageSelection("en", "English")) is None
    assert translator.calls == []


def test_selection_without_text_does_not_translate(session, translator):
    assert session.select(Role.TARGET, FRENCH) is None
    assert session.state.target == FRENCH


def test_target_cannot_be_detect(session):
    with pytest.raises(ValueError):
        session.select(Role.TARGET, DETECT_LANGUAGE)


def test_swap_is_noop_while_detecting(session):
    session.edit("Hello")
    before = session.state

    assert session.swap() is False
    assert session.state == before


@pytest.mark.asyncio
async def test_double_swap_restores_state(session):
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")
    await session.submit()
    before = session.state

    assert session.swap()
    swapped = session.state
    assert swapped.source == FRENCH
    assert swapped.target == ENGLISH
    assert swapped.source_text == "Bonjour"
    assert swapped.target_text == "Hello"

    assert session.swap()
    assert session.state == before


def test_swap_with_placeholder_keeps_texts(session):
    session.select(Role.SOURCE, ENGLISH)
    session.select(Role.TARGET, FRENCH)

    assert session.swap()

    state = session.state
    assert (state.source, state.target) == (FRENCH, ENGLISH)
    assert state.source_text == PLACEHOLDER_TEXT
    assert state.target_text == ""


@pytest.mark.asyncio
async def test_clear_resets_field(session):
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")
    await session.submit()

    session.clear()

    state = session.state
    assert state.source_text == PLACEHOLDER_TEXT
    assert state.target_text == ""
    assert state.field_state == FieldState.PLACEHOLDER
    assert not state.clear_visible
    assert not state.submit_visible


@pytest.mark.asyncio
async def test_late_response_is_not_rendered(view, make_translator, fake_name):
    gate = asyncio.Event()

    async def slow_french(text, target, source):
        if target == "fr":
            await gate.wait()
            return TranslationResult("Bonjour", "en")
        return TranslationResult("Hallo", "en")

    session = TranslateSession(make_translator(slow_french), view, localized_name=fake_name)
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")

    first = asyncio.create_task(session.submit())
    await asyncio.sleep(0)

    second = session.select(Role.TARGET, GERMAN)
    assert await second == TranslationResult("Hallo", "en")

    gate.set()
    assert await first is None
    assert session.state.target_text == "Hallo"
    assert not session.state.busy


@pytest.mark.asyncio
async def test_late_failure_is_not_alerted(view, make_translator, fake_name):
    gate = asyncio.Event()

    async def failing_french(text, target, source):
        if target == "fr":
            await gate.wait()
            raise ConnectionFailed("late")
        return TranslationResult("Hallo", "en")

    session = TranslateSession(make_translator(failing_french), view, localized_name=fake_name)
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")

    first = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    await session.select(Role.TARGET, GERMAN)

    gate.set()
    assert await first is None
    assert view.alerts == []
    assert session.state.target_text == "Hallo"


@pytest.mark.asyncio
async def test_clear_drops_in_flight_response(view, make_translator, fake_name):
    gate = asyncio.Event()

    async def slow(text, target, source):
        await gate.wait()
        return TranslationResult("Bonjour", "en")

    session = TranslateSession(make_translator(slow), view, localized_name=fake_name)
    session.select(Role.TARGET, FRENCH)
    session.edit("Hello")

    pending = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    session.clear()
    assert not session.state.busy

    gate.set()
    assert await pending is None
    state = session.state
    assert state.target_text == ""
    assert state.source == DETECT_LANGUAGE
    assert state.field_state == FieldState.PLACEHOLDER


@pytest.mark.asyncio
async def test_swap_drops_in_flight_response(view, make_translator, fake_name):
    gate = asyncio.Event()

    async def slow(text, target, source):
        await gate.wait()
        return TranslationResult("Bonjour", "en")

    state = TranslateState(source=ENGLISH, target=FRENCH, source_text="Hello", field_state=FieldState.EDITING)
    session = TranslateSession(make_translator(slow), view, localized_name=fake_name, state=state)

    pending = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    assert session.swap()

    gate.set()
    assert await pending is None
    state = session.state
    assert (state.source, state.target) == (FRENCH, ENGLISH)
    assert state.source_text == ""
    assert state.target_text == "Hello"
    assert not state.busy


def test_select_without_running_loop_leaves_state_unchanged(session, translator):
    session.edit("Hello")
    before = session.state

    with pytest.raises(RuntimeError):
        session.select(Role.TARGET, FRENCH)

    assert session.state == before
    assert translator.calls == []

def test_default_view_accepts_updates(translator, fake_name):
    session = TranslateSession(translator, localized_name=fake_name)

    session.edit("Hello")

    assert session.state.source_text == "Hello"
    assert type(session.view) is TranslateView
