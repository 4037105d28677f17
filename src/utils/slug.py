# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Slug helpers for universities and programs.

University slugs are the plain slugified name and rely on the database
unique constraint. Program slugs get a short random base-36 suffix so two
programs with the same name at different universities rarely collide.
"""

import re
import secrets
import unicodedata

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

SUFFIX_LENGTH = 5


def slugify(value: str) -> str:
    """Turn arbitrary text into a lowercase, URL-safe slug.

    Accented characters are folded to ASCII, every run of other
    characters becomes a single dash, and leading/trailing dashes are
    stripped.

    Example:
        >>> slugify("Amity University, Noida")
        'amity-university-noida'
    """
    normalized = unicodedata.normalize("NFKD", value)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG.sub("-", ascii_text.lower()).strip("-")


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    """Random lowercase base-36 string."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def program_slug(name: str) -> str:
    """Build a program slug: slugified name plus a random disambiguator.

    Example:
        >>> program_slug("Online MBA")  # doctest: +SKIP
        'online-mba-k3x9q'
    """
    base = slugify(name) or "program"
    return f"{base}-{random_suffix()}"
