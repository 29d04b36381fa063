"""
Keyword category classifier

Maps an English headline to one of the site's navigation sections. Rules are
evaluated top to bottom and the first match wins, so a headline about a
minister opening a cricket stadium lands in sports. Keywords match as plain
substrings: "sport" also matches "sports" and "esports".
"""

import re
from typing import List, Optional, Pattern, Tuple

from ..models.news_article import CategoryLabel


def _any_of(*keywords: str) -> Pattern:
    return re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)


CATEGORY_RULES: List[Tuple[CategoryLabel, Pattern]] = [
    (CategoryLabel.SPORTS, _any_of(
        "cricket", "football", "soccer", "rugby", "sport", "match", "team", "tournament",
        "cup", "league", "player", "game", "score", "wicket", "goal", "athlete", "olympic",
        "race", "swim", "tennis", "badminton", "basketball", "netball",
    )),
    (CategoryLabel.BUSINESS, _any_of(
        "market", "economy", "gdp", "trade", "business", "company", "invest", "stock",
        "finance", "bank", "loan", "revenue", "export", "import", "tax", "budget", "profit",
        "rupee", "usd", "dollar", "economic",
    )),
    (CategoryLabel.POLITICS, _any_of(
        "president", "minister", "parliament", "election", "government", "political",
        "party", "vote", "senator", "cabinet", "policy", "law", "court", "judge", "legal",
        "mp", "ruling", "opposition", "candidate",
    )),
    (CategoryLabel.OPINION, _any_of(
        "opinion", "editorial", "column", "view", "analysis", "comment", "perspective",
        "argue", "debate", "essay", "letter",
    )),
    (CategoryLabel.ENTERTAINMENT, _any_of(
        "film", "movie", "music", "actor", "actress", "singer", "concert", "award",
        "celebrity", "entertain", "drama", "theatre", "show", "tv", "television", "series",
        "song", "album", "fashion", "wedding",
    )),
    (CategoryLabel.LIFE, _any_of(
        "health", "food", "recipe", "travel", "lifestyle", "education", "family", "child",
        "parent", "home", "garden", "yoga", "wellness", "fitness", "diet", "weight",
        "doctor", "hospital", "medical",
    )),
]


def classify(title_en: Optional[str]) -> CategoryLabel:
    if not title_en:
        return CategoryLabel.NEWS

    text = title_en.lower()
    for label, pattern in CATEGORY_RULES:
        if pattern.search(text):
            return label

    return CategoryLabel.NEWS
