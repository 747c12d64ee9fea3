"""Terminal message helpers for the dbhandle CLI.

Messages go to stderr so stdout stays free for machine-readable output.
Glyphs fall back to ASCII on terminals that cannot encode emoji.
"""

import click

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
ERROR = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on the current stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(pair: tuple[str, str]) -> str:
    """Pick the emoji of an ``(emoji, fallback)`` pair when stderr supports it."""
    emoji, fallback = pair
    return emoji if _supports_character(emoji) else fallback


def _emit(pair: tuple[str, str], msg: str, color: str) -> None:
    click.secho(f"{glyph(pair)}  {msg}", fg=color, bold=True, err=True)


def warn(msg: str) -> None:
    """Yellow warning line on stderr, e.g. ``⚠️  Pool exhausted``."""
    _emit(CAUTION, msg, "yellow")


def success(msg: str) -> None:
    """Green success line on stderr, e.g. ``✅  Database reachable``."""
    _emit(SUCCESS, msg, "green")


def error(msg: str) -> None:
    """Red error line on stderr, e.g. ``❌  Cannot connect to database``."""
    _emit(ERROR, msg, "red")
