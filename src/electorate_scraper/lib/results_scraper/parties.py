"""Party-name canonicalization against a fixed Australian party taxonomy.

Upstream payloads label parties inconsistently ("Labor", "ALP",
"Australian Labor Party", or an object such as ``{"name": "LNP"}``). The
canonicalizer maps every known alias to one canonical full name and derives
a short code, preserving unknown names rather than discarding them.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

INDEPENDENT = "Independent"
UNKNOWN_SHORT_CODE = "UNK"

# Object-valued party fields are read in this order.
PARTY_OBJECT_FIELDS: tuple[str, ...] = ("name", "fullName", "shortName", "short")

# Aliases shorter than this are ignored when scanning free text.
_MIN_MENTION_LENGTH = 3

_CANONICAL_ALIASES: dict[str, tuple[str, ...]] = {
    "Australian Labor Party": (
        "Labor",
        "Labor Party",
        "ALP",
        "Australian Labor Party (Queensland Branch)",
        "Australian Labor Party (Western Australian Branch)",
        "Australian Labor Party (NSW Branch)",
        "Country Labor",
    ),
    "Liberal National Party": (
        "LNP",
        "Liberal National",
        "Liberal National Party of Queensland",
    ),
    "Liberal Party": (
        "Liberal",
        "Liberals",
        "LIB",
        "Liberal Party of Australia",
        "Liberal Party of Australia (WA Division)",
    ),
    "The Nationals": (
        "National",
        "Nationals",
        "National Party",
        "NAT",
        "Nationals WA",
        "WA Nationals",
        "The Nationals WA",
    ),
    "The Greens": (
        "Greens",
        "GRN",
        "Australian Greens",
        "Queensland Greens",
        "Greens WA",
        "The Greens (WA)",
        "The Greens NSW",
    ),
    "Pauline Hanson's One Nation": (
        "One Nation",
        "PHON",
        "ON",
        "Pauline Hanson's One Nation Queensland Division",
    ),
    "Katter's Australian Party": (
        "KAP",
        "Katter",
        "Katter's Australian Party (KAP)",
    ),
    "Country Liberal Party": ("CLP", "Country Liberals"),
    "Legalise Cannabis Party": (
        "Legalise Cannabis",
        "Legalise Cannabis Queensland (Party)",
        "Legalise Cannabis WA Party",
    ),
    "Family First": ("Family First Party", "FFP"),
    "Shooters, Fishers and Farmers Party": ("Shooters, Fishers and Farmers", "SFF"),
    INDEPENDENT: ("IND", "Ind", "Ind.", "Independents"),
}

_SHORT_CODES: dict[str, str] = {
    "Australian Labor Party": "ALP",
    "Labor Party": "ALP",
    "Labor": "ALP",
    "Liberal National Party": "LNP",
    "Liberal Party": "LIB",
    "Liberal": "LIB",
    "The Nationals": "NAT",
    "Nationals": "NAT",
    "The Greens": "GRN",
    "Australian Greens": "GRN",
    "Greens": "GRN",
    "One Nation": "ON",
    "Pauline Hanson's One Nation": "PHON",
    "Katter's Australian Party": "KAP",
    "Country Liberal Party": "CLP",
    "Legalise Cannabis Party": "LCP",
    "Family First": "FF",
    "Shooters, Fishers and Farmers Party": "SFF",
    INDEPENDENT: "IND",
}


@dataclass(frozen=True)
class PartyTaxonomy:
    """Immutable alias and short-code tables.

    Attributes:
        aliases: Raw label (exact, case-sensitive) -> canonical full name.
        short_codes: Canonical name or direct alias -> short code.
    """

    aliases: Mapping[str, str] = field(default_factory=dict)
    short_codes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))
        object.__setattr__(self, "short_codes", MappingProxyType(dict(self.short_codes)))

    @property
    def canonical_names(self) -> list[str]:
        """Distinct canonical names, in table order."""
        return list(dict.fromkeys(self.aliases.values()))

    @classmethod
    def from_groups(cls, groups: Mapping[str, tuple[str, ...]], short_codes: Mapping[str, str]) -> "PartyTaxonomy":
        """Build a taxonomy from ``canonical -> aliases`` groups.

        Each canonical name is also registered as an alias of itself.
        """
        aliases: dict[str, str] = {}
        for canonical, names in groups.items():
            aliases[canonical] = canonical
            for name in names:
                aliases[name] = canonical
        return cls(aliases=aliases, short_codes=short_codes)


DEFAULT_PARTY_TAXONOMY = PartyTaxonomy.from_groups(_CANONICAL_ALIASES, _SHORT_CODES)


def _initialism(name: str) -> str:
    """First alphanumeric character of each word, uppercased."""
    letters = []
    for word in name.split():
        match = re.search(r"[^\W_]", word)
        if match:
            letters.append(match.group(0))
    return "".join(letters).upper()


class PartyCanonicalizer:
    """Maps raw party labels onto a :class:`PartyTaxonomy`.

    Args:
        taxonomy: Alias and short-code tables; defaults to the built-in
            Australian taxonomy.
    """

    def __init__(self, taxonomy: PartyTaxonomy = DEFAULT_PARTY_TAXONOMY) -> None:
        self._taxonomy = taxonomy
        mentionable = [alias for alias in taxonomy.aliases if len(alias) >= _MIN_MENTION_LENGTH]
        mentionable.sort(key=len, reverse=True)
        self._mention_patterns = [
            (re.compile(rf"(?<!\w){re.escape(alias)}(?!\w)"), taxonomy.aliases[alias]) for alias in mentionable
        ]

    @property
    def taxonomy(self) -> PartyTaxonomy:
        return self._taxonomy

    def canonicalize(self, raw: Any) -> str:
        """Resolve a raw party value to its canonical name.

        Args:
            raw: A string, a mapping with ``name``/``fullName``/``shortName``/
                ``short``, or None.

        Returns:
            The canonical name for known aliases, the raw string for unknown
            parties, or ``"Independent"`` when no label is present.
        """
        if isinstance(raw, Mapping):
            label = next(
                (v.strip() for key in PARTY_OBJECT_FIELDS if isinstance(v := raw.get(key), str) and v.strip()),
                INDEPENDENT,
            )
        elif isinstance(raw, str) and raw.strip():
            label = raw.strip()
        else:
            label = INDEPENDENT
        return self._taxonomy.aliases.get(label, label)

    def short_code_for(self, name: Any) -> str:
        """Return the short code for a party name.

        Unknown names get an initialism; non-string or blank input gets ``"UNK"``.
        """
        if not isinstance(name, str) or not name.strip():
            return UNKNOWN_SHORT_CODE
        code = self._taxonomy.short_codes.get(name.strip())
        if code is not None:
            return code
        return _initialism(name) or UNKNOWN_SHORT_CODE

    def find_party_mention(self, text: str) -> str | None:
        """Canonical name of the longest taxonomy alias mentioned in ``text``."""
        for pattern, canonical in self._mention_patterns:
            if pattern.search(text):
                return canonical
        return None


_default_canonicalizer = PartyCanonicalizer()


def canonicalize_party(raw: Any) -> str:
    """Canonicalize ``raw`` with the built-in taxonomy."""
    return _default_canonicalizer.canonicalize(raw)


def short_code_for(name: Any) -> str:
    """Short code for ``name`` with the built-in taxonomy."""
    return _default_canonicalizer.short_code_for(name)
