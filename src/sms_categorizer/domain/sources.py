from collections.abc import Iterable

DEFAULT_ALLOWED_SOURCES: tuple[str, ...] = (
    "com.google.android.apps.messaging",
    "com.samsung.android.messaging",
    "com.android.mms",
)


def parse_list(raw_value: str | None) -> list[str]:
    if not raw_value:
        return []
    parts = [part.strip() for part in raw_value.split(",")]
    items: list[str] = []
    seen = set()
    for part in parts:
        if part and part not in seen:
            items.append(part)
            seen.add(part)
    return items


def is_allowed_source(source: str | None, allowed: Iterable[str] = DEFAULT_ALLOWED_SOURCES) -> bool:
    if not source:
        return False
    return source in set(allowed)


def compose_message(title: str | None, text: str | None) -> str:
    """Join a notification title and body the way the messaging apps show them."""
    prefix = f"{title} " if title is not None else ""
    body = text if text is not None else ""
    return prefix + body
