from app.schemas.deck import DeckTheme
from app.schemas.project_data import BrandConfig


def normalize_hex(color: str) -> str:
    """Strip a leading ``#`` and upper-case.  No validation is done here."""
    return color.strip().lstrip("#").upper()


def resolve_theme(brand: BrandConfig) -> DeckTheme:
    """Resolve the brand colors once per assembly.

    Malformed colors pass through unchanged; the renderer degrades them to
    the neutral text color instead of failing.
    """
    return DeckTheme(
        primary=normalize_hex(brand.primary_color),
        secondary=normalize_hex(brand.secondary_color),
        accent=normalize_hex(brand.accent_color),
        dark=normalize_hex(brand.dark_color),
        light=normalize_hex(brand.light_color),
    )
