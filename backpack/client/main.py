"""
Console front end for translation and currency conversion.
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation

from backpack.currency import CurrencyEntry, RateService, convert, format_amount
from backpack.shared.errors import ServiceError
from backpack.shared.locale import language
from backpack.shared.models import (
    ALERT_TITLE,
    DETECT,
    ErrorKind,
    Role,
    TranslateState,
    encode_result,
)
from backpack.translators import DEFAULT_PROVIDER, create_translator, list_providers
from backpack.client.session import TranslateSession, TranslateView


logger = logging.getLogger(__name__)


def print_alert(kind: ErrorKind):
    print(f"{ALERT_TITLE}: {kind.message}", file=sys.stderr)


class ConsoleView(TranslateView):
    """Prints translations and alerts as they arrive."""

    def __init__(self):
        self._last_target = ""

    def render(self, state: TranslateState):
        if state.busy:
            return
        if state.target_text and state.target_text != self._last_target:
            print(f"[{state.source.code}] {state.source_text}")
            print(f"[{state.target.code}] {state.target_text}")
        self._last_target = state.target_text

    def show_alert(self, kind: ErrorKind):
        print_alert(kind)


async def run_translate(args) -> int:
    translator = create_translator(args.translator, api_key=args.api_key)
    result = await translator.translate(args.text, args.target, args.source)

    if args.json:
        print(encode_result(result))
    else:
        if args.source == DETECT:
            print(f"Detected: {language(result.detected_source_language_code).display_name}")
        print(result.translated_text)
    return 0


async def run_languages(args) -> int:
    translator = create_translator(args.translator, api_key=args.api_key)
    for lang in await translator.supported_languages(args.display_locale):
        print(f"{lang.code:<8} {lang.display_name}")
    return 0


async def run_convert(args) -> int:
    try:
        amount = Decimal(args.amount)
    except InvalidOperation:
        print(f"Invalid amount: {args.amount}", file=sys.stderr)
        return 2

    source = CurrencyEntry.from_locale(args.source, args.display_locale)
    target = CurrencyEntry.from_locale(args.target, args.display_locale)

    service = RateService(api_key=args.rates_api_key)
    await service.refresh([source, target])

    converted = convert(amount, source, target)
    print(
        f"{format_amount(amount, args.display_locale)} {source.iso_code} = "
        f"{format_amount(converted, args.display_locale)} {target.iso_code} ({target.symbol})"
    )
    return 0


async def run_interactive(args) -> int:
    translator = create_translator(args.translator, api_key=args.api_key)
    session = TranslateSession(translator, ConsoleView())
    session.select(Role.TARGET, language(args.target))
    if args.source != DETECT:
        session.select(Role.SOURCE, language(args.source))

    print("Type text to translate. Commands: :to CODE, :from CODE, :swap, :clear, :quit")
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        line = line.rstrip("\n")

        if line in (":quit", ":q"):
            break
        elif line.startswith(":to ") or line.startswith(":from "):
            try:
                command, code = line.split(maxsplit=1)
                role = Role.TARGET if command == ":to" else Role.SOURCE
                task = session.select(role, language(code.strip()))
            except ValueError as e:
                print(e, file=sys.stderr)
                continue
            if task is not None:
                await task
        elif line == ":swap":
            if not session.swap():
                print("Cannot swap while detecting the source language", file=sys.stderr)
        elif line == ":clear":
            session.clear()
        else:
            session.edit(line)
            await session.submit()
    return 0


COMMANDS = {
    "translate": run_translate,
    "languages": run_languages,
    "convert": run_convert,
    "interactive": run_interactive,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="backpack", description="Translation and currency tools")
    parser.add_argument("--translator", default=DEFAULT_PROVIDER, choices=list_providers())
    parser.add_argument("--api-key", help="Translation API key (defaults to provider env var)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    translate = sub.add_parser("translate", help="Translate text")
    translate.add_argument("text")
    translate.add_argument("--to", dest="target", default="en", help="Target language code")
    translate.add_argument("--from", dest="source", default=DETECT, help="Source language code or 'detect'")
    translate.add_argument("--json", action="store_true", help="Print the result as JSON")

    languages = sub.add_parser("languages", help="List supported languages")
    languages.add_argument("--display-locale", default="en")

    conv = sub.add_parser("convert", help="Convert an amount between two locales' currencies")
    conv.add_argument("amount")
    conv.add_argument("source", help="Locale identifier, e.g. en_US")
    conv.add_argument("target", help="Locale identifier, e.g. fr_FR")
    conv.add_argument("--display-locale", default="en_US")
    conv.add_argument("--rates-api-key", help="Exchange rate API key (defaults to FIXER_API_KEY)")

    interactive = sub.add_parser("interactive", help="Line based translate session")
    interactive.add_argument("--to", dest="target", default="en")
    interactive.add_argument("--from", dest="source", default=DETECT)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(COMMANDS[args.command](args))
    except ServiceError as e:
        logger.debug("Command failed: %s", e)
        print_alert(e.kind)
        return 1
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nStopped.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
