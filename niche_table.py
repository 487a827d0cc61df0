#!/usr/bin/env python3
"""
Niche keyword and monetization-rate tables.

A table is an ordered list of niche profiles plus the fallback rates used
when a channel matches no niche or a niche has no sponsorship data. Order
matters: when two niches score the same, the one listed first wins.

Tables are plain data so market rates can be recalibrated without touching
the estimation code, either by editing the built-in tables below or by
loading a JSON file with `load_niche_table`:

    {
      "niches": [
        {"name": "Gaming", "keywords": ["gaming"], "rpm": {"low": 1, "high": 7},
         "sponsorshipCpm": {"low": 5, "high": 15}, "deals": {"low": 4, "high": 8}}
      ],
      "defaultRpm": {"low": 2, "high": 10},
      "defaultSponsorshipCpm": {"low": 8, "high": 20},
      "defaultDeals": {"low": 1, "high": 2}
    }
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from models import RateRange

GENERAL_NICHE = "General"
DEFAULT_CPM_KEY = "default"


@dataclass(frozen=True)
class NicheProfile:
    name: str
    keywords: Tuple[str, ...]
    rpm: RateRange
    sponsorship_cpm: Optional[RateRange] = None
    deals: Optional[RateRange] = None


@dataclass(frozen=True)
class NicheTable:
    niches: Tuple[NicheProfile, ...]
    default_rpm: RateRange = RateRange(2.0, 10.0)
    default_sponsorship_cpm: RateRange = RateRange(8, 20)
    default_deals: RateRange = RateRange(1, 2)
    name: str = field(default="custom", compare=False)
    _by_name: Dict[str, NicheProfile] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_by_name", {n.name: n for n in self.niches})

    def get(self, name: str) -> Optional[NicheProfile]:
        return self._by_name.get(name)

    def sponsorship_cpm_for(self, name: str) -> RateRange:
        profile = self.get(name)
        if profile and profile.sponsorship_cpm:
            return profile.sponsorship_cpm
        return self.default_sponsorship_cpm

    def deals_for(self, name: str) -> RateRange:
        profile = self.get(name)
        if profile and profile.deals:
            return profile.deals
        return self.default_deals

    def sponsorship_cpms(self) -> Dict[str, RateRange]:
        """Sponsorship CPM per niche that has one, plus the "default" entry."""
        cpms = {n.name: n.sponsorship_cpm for n in self.niches if n.sponsorship_cpm}
        cpms[DEFAULT_CPM_KEY] = self.default_sponsorship_cpm
        return cpms


def _niche(name: str, keywords: List[str], rpm: Tuple[float, float],
           cpm: Optional[Tuple[float, float]] = None,
           deals: Optional[Tuple[int, int]] = None) -> NicheProfile:
    return NicheProfile(
        name=name,
        keywords=tuple(keywords),
        rpm=RateRange(*rpm),
        sponsorship_cpm=RateRange(*cpm) if cpm else None,
        deals=RateRange(*deals) if deals else None,
    )


# Fine-grained table with sponsorship data. Listed roughly by RPM, highest first.
DETAILED_TABLE = NicheTable(name="detailed", niches=(
    _niche("Real Estate", ["real estate", "property", "mortgage", "realtor"],
           (12.0, 40.0), cpm=(15, 25), deals=(1, 2)),
    _niche("Finance & Investing", ["investing", "finance", "crypto", "stocks", "trading"],
           (15.0, 50.0), cpm=(20, 50), deals=(1, 2)),
    _niche("Technology", ["tech", "review", "programming", "code", "developer", "ai",
                          "gadget", "phone", "computer", "software"],
           (10.0, 30.0), cpm=(15, 30), deals=(2, 4)),
    _niche("Business & Entrepreneurship", ["business", "entrepreneurship", "saas", "marketing", "ecommerce"],
           (10.0, 25.0)),
    _niche("Education (Professional)", ["tutorial", "how to", "learn", "education", "skill", "course"],
           (10.0, 25.0)),
    _niche("Health & Fitness", ["health", "fitness", "workout", "nutrition", "wellness"],
           (5.0, 20.0), cpm=(10, 20), deals=(1, 3)),
    _niche("Beauty & Fashion", ["beauty", "fashion", "makeup", "style", "haul"],
           (5.0, 18.0), cpm=(10, 18), deals=(2, 3)),
    _niche("Travel (Luxury)", ["travel", "vlog", "luxury", "resort", "airline"],
           (8.0, 20.0)),
    _niche("ASMR", ["asmr", "relaxing", "tingles", "sleep"],
           (7.0, 15.0)),
    _niche("Home Improvement", ["diy", "home improvement", "renovation", "crafts"],
           (6.0, 12.0)),
    _niche("Pets & Animals", ["pets", "animals", "dog", "cat"],
           (3.0, 10.0)),
    _niche("Entertainment & Comedy", ["entertainment", "comedy", "vlog", "prank", "funny"],
           (2.0, 8.0), cpm=(5, 10), deals=(1, 2)),
    _niche("Gaming", ["gaming", "gameplay", "let's play"],
           (1.0, 7.0), cpm=(5, 15), deals=(4, 8)),
    _niche("Food & Cooking", ["food", "cooking", "recipe"],
           (1.0, 12.0)),
))

# Older five-bucket table. No sponsorship data, so every niche uses the defaults.
COARSE_TABLE = NicheTable(name="coarse", niches=(
    _niche("Finance & Business", ["investing", "finance", "crypto", "business", "marketing", "software",
                                  "real estate", "trading", "ecommerce", "stocks"],
           (8.0, 20.0)),
    _niche("Tech", ["tech", "review", "programming", "code", "developer", "ai", "gadget", "phone", "computer"],
           (5.0, 15.0)),
    _niche("Education", ["tutorial", "how to", "learn", "education", "science", "history", "documentary"],
           (4.0, 12.0)),
    _niche("Gaming", ["gaming", "gameplay", "let's play", "fortnite", "minecraft", "roblox", "valorant"],
           (1.5, 5.0)),
    _niche("Entertainment & Comedy", ["vlog", "prank", "music", "entertainment", "comedy", "funny", "challenge"],
           (1.0, 4.0)),
))

BUILTIN_TABLES = {
    "detailed": DETAILED_TABLE,
    "coarse": COARSE_TABLE,
}


def _optional_range(data: Optional[Dict[str, Any]]) -> Optional[RateRange]:
    return RateRange.from_dict(data) if data else None


def niche_table_from_dict(data: Dict[str, Any], name: str = "custom") -> NicheTable:
    niches = tuple(
        NicheProfile(
            name=item["name"],
            keywords=tuple(k.lower() for k in item["keywords"]),
            rpm=RateRange.from_dict(item["rpm"]),
            sponsorship_cpm=_optional_range(item.get("sponsorshipCpm")),
            deals=_optional_range(item.get("deals")),
        )
        for item in data["niches"]
    )
    kwargs = {}
    for key, attr in (("defaultRpm", "default_rpm"),
                      ("defaultSponsorshipCpm", "default_sponsorship_cpm"),
                      ("defaultDeals", "default_deals")):
        if data.get(key):
            kwargs[attr] = RateRange.from_dict(data[key])
    return NicheTable(niches=niches, name=name, **kwargs)


def load_niche_table(path: Union[str, Path]) -> NicheTable:
    """Load a niche table from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return niche_table_from_dict(json.load(f), name=str(path))


def resolve_niche_table(name_or_path: str) -> NicheTable:
    """Return a built-in table by name ("detailed", "coarse") or load one from a JSON path."""
    key = (name_or_path or "detailed").strip()
    if key.lower() in BUILTIN_TABLES:
        return BUILTIN_TABLES[key.lower()]
    return load_niche_table(key)
