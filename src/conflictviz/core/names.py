"""
Country-name reconciliation between event files and a boundary dataset.

Responsibilities
- Map free-text country names used by the event files onto the canonical entity
  names of a geographic boundary dataset (world-atlas 110m by default).
- Give every canonical entity a numeric value for choropleth coloring.

Resolution order for each canonical name N
1. An alias whose target is N and whose source name has a value.
2. An exact source key equal to N.
3. The first source key (in mapping iteration order) that case-insensitively
   contains N or is contained in N. Empty keys never match.
4. 0.

Notes
- Reconciliation never raises. Unresolved names resolve to 0 and are logged at
  DEBUG as soft misses. Substring matching can both miss and mis-assign (for example
  "Niger" picks up "Nigeria" when no "Niger" row exists); that is an accepted
  limitation of the heuristic.
- Zero-IO (stdlib + pydantic only).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

__all__ = [
    "CanonicalCountryValue",
    "DEFAULT_ALIASES",
    "WORLD_ATLAS_NAMES",
    "resolve_name",
    "reconcile",
    "unresolved",
]

logger = logging.getLogger(__name__)

# Event-file spelling -> world-atlas 110m spelling. Order matters when several
# aliases share a target: the first one with a value wins.
DEFAULT_ALIASES: dict[str, str] = {
    "United States": "United States of America",
    "Democratic Republic of Congo": "Dem. Rep. Congo",
    "Democratic Republic of the Congo": "Dem. Rep. Congo",
    "Republic of Congo": "Congo",
    "Central African Republic": "Central African Rep.",
    "South Sudan": "S. Sudan",
    "Ivory Coast": "Côte d'Ivoire",
    "Cote d'Ivoire": "Côte d'Ivoire",
    "Swaziland": "eSwatini",
    "Eswatini": "eSwatini",
    "Equatorial Guinea": "Eq. Guinea",
    "Western Sahara": "W. Sahara",
    "Dominican Republic": "Dominican Rep.",
    "Bosnia and Herzegovina": "Bosnia and Herz.",
    "North Macedonia": "Macedonia",
    "Czech Republic": "Czechia",
    "East Timor": "Timor-Leste",
    "Solomon Islands": "Solomon Is.",
    "Falkland Islands": "Falkland Is.",
    "Northern Cyprus": "N. Cyprus",
    "Burma": "Myanmar",
    "Russian Federation": "Russia",
    "Syrian Arab Republic": "Syria",
}

# Country names of the world-atlas countries-110m TopoJSON (properties.name).
WORLD_ATLAS_NAMES: tuple[str, ...] = (
    "Fiji", "Tanzania", "W. Sahara", "Canada", "United States of America",
    "Kazakhstan", "Uzbekistan", "Papua New Guinea", "Indonesia", "Argentina",
    "Chile", "Dem. Rep. Congo", "Somalia", "Kenya", "Sudan", "Chad", "Haiti",
    "Dominican Rep.", "Russia", "Bahamas", "Falkland Is.", "Norway", "Greenland",
    "Fr. S. Antarctic Lands", "Timor-Leste", "South Africa", "Lesotho", "Mexico",
    "Uruguay", "Brazil", "Bolivia", "Peru", "Colombia", "Panama", "Costa Rica",
    "Nicaragua", "Honduras", "El Salvador", "Guatemala", "Belize", "Venezuela",
    "Guyana", "Suriname", "France", "Ecuador", "Puerto Rico", "Jamaica", "Cuba",
    "Zimbabwe", "Botswana", "Namibia", "Senegal", "Mali", "Mauritania", "Benin",
    "Niger", "Nigeria", "Cameroon", "Togo", "Ghana", "Côte d'Ivoire", "Guinea",
    "Guinea-Bissau", "Liberia", "Sierra Leone", "Burkina Faso",
    "Central African Rep.", "Congo", "Gabon", "Eq. Guinea", "Zambia", "Malawi",
    "Mozambique", "eSwatini", "Angola", "Burundi", "Israel", "Lebanon",
    "Madagascar", "Palestine", "Gambia", "Tunisia", "Algeria", "Jordan",
    "United Arab Emirates", "Qatar", "Kuwait", "Iraq", "Oman", "Vanuatu",
    "Cambodia", "Thailand", "Laos", "Myanmar", "Vietnam", "North Korea",
    "South Korea", "Mongolia", "India", "Bangladesh", "Bhutan", "Nepal",
    "Pakistan", "Afghanistan", "Tajikistan", "Kyrgyzstan", "Turkmenistan", "Iran",
    "Syria", "Armenia", "Sweden", "Belarus", "Ukraine", "Poland", "Austria",
    "Hungary", "Moldova", "Romania", "Lithuania", "Latvia", "Estonia", "Germany",
    "Bulgaria", "Greece", "Turkey", "Albania", "Croatia", "Switzerland",
    "Luxembourg", "Belgium", "Netherlands", "Portugal", "Spain", "Ireland",
    "New Caledonia", "Solomon Is.", "New Zealand", "Australia", "Sri Lanka",
    "China", "Taiwan", "Italy", "Denmark", "United Kingdom", "Iceland",
    "Azerbaijan", "Georgia", "Philippines", "Malaysia", "Brunei", "Slovenia",
    "Finland", "Slovakia", "Czechia", "Eritrea", "Japan", "Paraguay", "Yemen",
    "Saudi Arabia", "Antarctica", "N. Cyprus", "Cyprus", "Morocco", "Egypt",
    "Libya", "Ethiopia", "Djibouti", "Somaliland", "Uganda", "Rwanda",
    "Bosnia and Herz.", "Macedonia", "Serbia", "Montenegro", "Kosovo",
    "Trinidad and Tobago", "S. Sudan",
)  # fmt: skip


class CanonicalCountryValue(BaseModel):
    """Value assigned to one boundary-dataset entity (0 when nothing matched)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    canonical_name: str
    value: float = 0.0
    source_name: str | None = None


def resolve_name(
    canonical: str,
    source: Mapping[str, float],
    aliases: Mapping[str, str] = DEFAULT_ALIASES,
) -> str | None:
    """
    Return the source key that supplies the value for a canonical name, if any.

    Examples:
        >>> resolve_name("Myanmar", {"Burma": 42.0}, {"Burma": "Myanmar"})
        'Burma'
        >>> resolve_name("Atlantis", {"Iraq": 1.0}) is None
        True
    """
    for src, target in aliases.items():
        if target == canonical and src in source:
            return src
    if canonical in source:
        return canonical
    needle = canonical.casefold()
    if not needle:
        return None
    for key in source:
        hay = key.casefold()
        if hay and (needle in hay or hay in needle):
            return key
    return None


def reconcile(
    source: Mapping[str, float],
    canonical_names: Iterable[str] = WORLD_ATLAS_NAMES,
    aliases: Mapping[str, str] = DEFAULT_ALIASES,
) -> list[CanonicalCountryValue]:
    """
    Assign a value to every canonical entity.

    Args:
        source (Mapping[str, float]): Free-text country name -> aggregate value.
        canonical_names (Iterable[str]): Boundary-dataset names (output order).
        aliases (Mapping[str, str]): Source spelling -> canonical spelling.

    Returns:
        list[CanonicalCountryValue]: One entry per canonical name, in input order.

    Examples:
        >>> out = reconcile({"Burma": 42}, ["Myanmar", "Iraq"], {"Burma": "Myanmar"})
        >>> [(c.canonical_name, c.value) for c in out]
        [('Myanmar', 42.0), ('Iraq', 0.0)]
    """
    out: list[CanonicalCountryValue] = []
    misses = 0
    for name in canonical_names:
        key = resolve_name(name, source, aliases)
        if key is None:
            misses += 1
            logger.debug("no source row for canonical country %r; using 0", name)
            out.append(CanonicalCountryValue(canonical_name=name))
            continue
        out.append(CanonicalCountryValue(canonical_name=name, value=float(source[key]), source_name=key))
    if misses:
        logger.debug("reconciled %d canonical names, %d soft misses", len(out), misses)
    return out


def unresolved(
    source: Mapping[str, float],
    results: Iterable[CanonicalCountryValue],
) -> list[str]:
    """Source keys no canonical entity consumed, in source order (diagnostics only)."""
    used = {r.source_name for r in results if r.source_name is not None}
    return [k for k in source if k not in used]
