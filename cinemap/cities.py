"""Major world cities that get their own location page: local or English name -> (English name, country)."""
from __future__ import annotations

from typing import Dict, Tuple

_CITIES_BY_COUNTRY = {
    "United Kingdom": {
        "London": ["Greater London"],
        "Birmingham": [],
        "Manchester": [],
        "Glasgow": [],
        "Edinburgh": [],
        "Liverpool": [],
        "Bristol": [],
        "Cardiff": [],
        "Belfast": [],
    },
    "United States": {
        "Los Angeles": [],
        "New York": ["New York City"],
        "Chicago": [],
        "Houston": [],
        "Phoenix": [],
        "Philadelphia": [],
        "San Antonio": [],
        "San Diego": [],
        "Dallas": [],
        "San Jose": [],
        "Austin": [],
        "Jacksonville": [],
        "San Francisco": [],
        "Columbus": [],
        "Indianapolis": [],
        "Seattle": [],
        "Denver": [],
        "Washington": [],
        "Boston": [],
        "Nashville": [],
        "Detroit": [],
        "Portland": [],
        "Las Vegas": [],
        "Miami": [],
        "Atlanta": [],
        "New Orleans": [],
    },
    "France": {"Paris": [], "Marseille": [], "Lyon": [], "Toulouse": [], "Nice": []},
    "Germany": {
        "Berlin": [],
        "Hamburg": [],
        "Munich": ["München"],
        "Cologne": ["Köln"],
        "Frankfurt": [],
    },
    "Spain": {"Madrid": [], "Barcelona": [], "Valencia": [], "Seville": ["Sevilla"]},
    "Italy": {
        "Rome": ["Roma"],
        "Milan": ["Milano"],
        "Naples": ["Napoli"],
        "Turin": ["Torino"],
        "Florence": ["Firenze"],
        "Venice": ["Venezia"],
    },
    "Canada": {
        "Toronto": [],
        "Vancouver": [],
        "Montreal": ["Montréal"],
        "Calgary": [],
        "Ottawa": [],
    },
    "Australia": {"Sydney": [], "Melbourne": [], "Brisbane": [], "Perth": [], "Adelaide": []},
    "Japan": {"Tokyo": ["東京"]},
    "China": {
        "Hong Kong": ["香港"],
        "Beijing": ["北京"],
        "Shanghai": ["上海"],
    },
    "Singapore": {"Singapore": []},
    "United Arab Emirates": {"Dubai": []},
    "India": {"Mumbai": [], "Delhi": []},
    "Turkey": {"Istanbul": ["İstanbul"]},
    "Russia": {"Moscow": ["Москва"]},
    "Czech Republic": {"Prague": ["Praha"]},
    "Austria": {"Vienna": ["Wien"]},
    "Netherlands": {"Amsterdam": []},
    "Belgium": {"Brussels": ["Bruxelles", "Brussel"]},
    "Ireland": {"Dublin": []},
    "Denmark": {"Copenhagen": ["København"]},
    "Sweden": {"Stockholm": []},
    "Norway": {"Oslo": []},
    "Finland": {"Helsinki": []},
    "Poland": {"Warsaw": ["Warszawa"]},
    "Hungary": {"Budapest": []},
    "Portugal": {"Lisbon": ["Lisboa"]},
    "Greece": {"Athens": ["Αθήνα", "Athína"]},
    "Lithuania": {"Vilnius": []},
    "Latvia": {"Riga": []},
    "Estonia": {"Tallinn": []},
    "Thailand": {"Bangkok": ["กรุงเทพมหานคร"]},
    "South Korea": {"Seoul": ["서울"]},
    "Mexico": {"Mexico City": ["Ciudad de México"]},
    "Argentina": {"Buenos Aires": []},
    "Brazil": {"Sao Paulo": ["São Paulo"], "Rio de Janeiro": []},
    "Egypt": {"Cairo": ["القاهرة"]},
    "South Africa": {"Cape Town": [], "Johannesburg": []},
}


def _build() -> Dict[str, Tuple[str, str]]:
    mapping: Dict[str, Tuple[str, str]] = {}
    for country, cities in _CITIES_BY_COUNTRY.items():
        for english, aliases in cities.items():
            for name in (english, *aliases):
                mapping[name] = (english, country)
    return mapping


MAJOR_CITIES = _build()


def find_major_city(display_name: str | None) -> Tuple[str, str] | None:
    """Match the comma-separated parts of a geocoder display name against MAJOR_CITIES."""
    if not display_name:
        return None
    for part in display_name.split(","):
        match = MAJOR_CITIES.get(part.strip())
        if match:
            return match
    return None
