from collections.abc import Iterable, Mapping

from app.schemas.project_data import EM_DASH, FIELD_FALLBACKS, is_blank


def is_present(values: Mapping[str, str], key: str) -> bool:
    return not is_blank(values.get(key))


def resolve_field(
    values: Mapping[str, str],
    key: str,
    fallback: str | None = None,
    alternates: Iterable[str] = (),
) -> str:
    """Return the first non-blank value among *key* and *alternates*.

    When none is usable, *fallback* is returned, or the canonical fallback for
    *key* when *fallback* is ``None``.  Unknown keys behave like missing ones.
    """
    for candidate in (key, *alternates):
        value = values.get(candidate)
        if not is_blank(value):
            return value.strip()
    if fallback is None:
        fallback = FIELD_FALLBACKS.get(key, EM_DASH)
    return fallback or EM_DASH
