"""Pure text coercions shared by every converter."""

from __future__ import annotations

from typing import Any

UNSPECIFIED = "unspecified"
UNSPECIFIED_URL = "http://url.unspecified"


def is_blank(text: str | None) -> bool:
    return text is None or not str(text).strip()


def fix_empty_string(text: str | None, use_instead: str | None = None) -> str:
    """
    Blank-to-placeholder rule for required target strings.

    None or whitespace-only text becomes ``use_instead`` when given, otherwise
    the literal "unspecified". Non-blank text is returned unchanged.
    """
    if is_blank(text):
        return UNSPECIFIED if use_instead is None else use_instead
    return text  # type: ignore[return-value]


def fix_url(url: str | None) -> str:
    """Give a bare host or path a scheme so the target accepts it as a URI."""
    if is_blank(url):
        return UNSPECIFIED_URL
    lowered = url.lower()
    if "://" in lowered:
        return url
    if lowered.startswith("/") or ":\\" in lowered:
        return "file://" + url
    return "http://" + url


def put(doc: dict[str, Any], key: str, value: Any) -> None:
    """Set ``doc[key]`` unless value is None; the target omits null fields."""
    if value is not None:
        doc[key] = value


def number_text(value: Any, default: str) -> str:
    """Render an optional extent number as target text."""
    return default if value is None else str(value)


def non_blank(text: str | None) -> str | None:
    """``text`` unchanged, or None when blank so ``put`` omits it."""
    return None if is_blank(text) else text
