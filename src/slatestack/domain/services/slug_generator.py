"""Slug generator service.

Generates URL-friendly slugs from text, typically an entry title.
Uniqueness within a collection is resolved by appending a numeric suffix.
"""

import re
import secrets
import string
import unicodedata
from collections.abc import Iterable


class SlugGenerator:
    """Generate URL-friendly slugs.

    Slugs are lowercase ASCII letters and digits separated by single hyphens,
    with no leading or trailing hyphen.
    """

    # Leaves room for a "-N" suffix inside the 255-character slug column
    MAX_LENGTH = 240
    FALLBACK_LENGTH = 8
    FALLBACK_ALPHABET = string.ascii_lowercase + string.digits

    _NON_ALNUM = re.compile(r"[^a-z0-9]+")

    @classmethod
    def generate(cls, text: str) -> str:
        """Generate a slug from text.

        The result is stable under repeated application:
        ``generate(generate(x)) == generate(x)``. Slugs longer than
        ``MAX_LENGTH`` are cut back to the last hyphen that fits.

        Examples:
            >>> SlugGenerator.generate("Hello World")
            'hello-world'
            >>> SlugGenerator.generate("  Crème Brûlée -- Recipe! ")
            'creme-brulee-recipe'
        """
        normalized = unicodedata.normalize("NFKD", text)
        ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
        slug = cls._NON_ALNUM.sub("-", ascii_text.lower()).strip("-")

        if len(slug) > cls.MAX_LENGTH:
            head = slug[: cls.MAX_LENGTH]
            # Cut at the last word boundary unless the slug is one long word
            if slug[cls.MAX_LENGTH] != "-" and "-" in head:
                head = head.rsplit("-", 1)[0]
            slug = head.rstrip("-")
        return slug

    @classmethod
    def random(cls) -> str:
        """Generate a random fallback slug."""
        return "".join(
            secrets.choice(cls.FALLBACK_ALPHABET) for _ in range(cls.FALLBACK_LENGTH)
        )

    @staticmethod
    def next_available(base_slug: str, taken: Iterable[str]) -> str:
        """Return ``base_slug`` or the first free ``base_slug-N`` (N >= 2).

        Args:
            base_slug: The desired slug.
            taken: Slugs already in use.

        Returns:
            A slug not contained in ``taken``.
        """
        taken_set = set(taken)
        if base_slug not in taken_set:
            return base_slug

        counter = 2
        while f"{base_slug}-{counter}" in taken_set:
            counter += 1
        return f"{base_slug}-{counter}"
