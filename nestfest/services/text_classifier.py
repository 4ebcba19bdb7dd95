# -*- coding: utf-8 -*-
"""Keyword classification of free-text business inputs.

Rules are ordered ``(predicate, category)`` pairs; the first predicate that
matches wins. Matching is case-insensitive and anchored at word starts, so
"app" matches "apps" and "application" but not "happy".
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

Predicate = Callable[[str], bool]


def keywords(*patterns: str) -> Predicate:
    """Build a predicate matching any regex fragment in ``patterns`` at a word start."""
    pattern = re.compile(r"\b(?:" + "|".join(patterns) + r")", re.IGNORECASE)
    return lambda text: bool(pattern.search(text))


# Business categories

PLATFORM = "platform"
CONSULTING = "consulting"
SERVICE = "service"
PRODUCT = "product"
GENERIC = "generic"

BUSINESS_RULES: list[tuple[Predicate, str]] = [
    (keywords(r"apps?\b", "application", "platform", "software", "digital", "online", "website", "saas",
              "manager", "tool", "marketplace", r"ai\b", "web"), PLATFORM),
    (keywords("consult", "advisory", "advisor", "coaching", "agency", "strategy"), CONSULTING),
    (keywords("service", "cleaning", "delivery", "repair", "tutoring", r"care\b",
              "catering", "landscap", "maintenance"), SERVICE),
    (keywords("product", "device", r"kits?\b", "apparel", "clothing", "brand", "gadget",
              "handmade", "wearable", "packaging"), PRODUCT),
]


# Market segments

@dataclass(frozen=True)
class MarketSegment:
    """Target customer group with canned descriptive prose."""

    key: str
    label: str
    description: str
    sizing: str


STUDENTS = MarketSegment(
    key="students",
    label="college students",
    description="College students juggle classes, work and tight budgets, and adopt "
                "tools quickly when they save time or money.",
    sizing="Austin-area colleges alone enroll well over 100,000 students, and campus "
           "word of mouth makes them an efficient first market.",
)
SMALL_BUSINESSES = MarketSegment(
    key="small_businesses",
    label="small businesses",
    description="Small business owners wear many hats and need affordable solutions that "
                "work without dedicated staff or long onboarding.",
    sizing="There are more than 30 million small businesses in the United States, and "
           "Central Texas adds thousands of new ones every year.",
)
ENTERPRISE = MarketSegment(
    key="enterprise",
    label="enterprise organizations",
    description="Larger organizations value reliability, integration with existing "
                "systems and measurable return on investment.",
    sizing="Enterprise buyers sign larger, longer contracts, so a handful of accounts "
           "can sustain early growth.",
)
RESTAURANTS = MarketSegment(
    key="restaurants",
    label="restaurants and food businesses",
    description="Restaurants operate on thin margins and feel every missed order, "
                "wasted ingredient and empty table.",
    sizing="The U.S. restaurant industry generates close to $1 trillion in annual sales "
           "across roughly one million locations.",
)
RETAIL = MarketSegment(
    key="retail",
    label="retail shops",
    description="Independent retailers compete with national chains and online giants "
                "and need every advantage in customer experience.",
    sizing="Retail remains one of the largest sectors of the economy, with independent "
           "stores making up a large share of storefronts.",
)
HEALTHCARE = MarketSegment(
    key="healthcare",
    label="healthcare providers and patients",
    description="Healthcare providers and patients want clearer communication, shorter "
                "waits and less paperwork.",
    sizing="Healthcare accounts for nearly a fifth of U.S. spending, and small practices "
           "are underserved by current tools.",
)
EDUCATION = MarketSegment(
    key="education",
    label="schools and educators",
    description="Educators are stretched thin and look for practical ways to engage "
                "learners and reduce administrative work.",
    sizing="Education is a large and stable market, with districts, colleges and "
           "training programs all investing in better outcomes.",
)
HOME_BASED = MarketSegment(
    key="home_based",
    label="home-based businesses",
    description="Home-based entrepreneurs need professional results without the overhead "
                "of an office or a full team.",
    sizing="About half of all U.S. small businesses are run from home, and the number "
           "keeps growing with remote work.",
)
DEFAULT_SEGMENT = MarketSegment(
    key="smb",
    label="small and medium businesses",
    description="Small and medium businesses need practical, affordable solutions that "
                "deliver results quickly.",
    sizing="Small and medium businesses make up the overwhelming majority of U.S. firms "
           "and employ nearly half of the private workforce.",
)

MARKET_RULES: list[tuple[Predicate, MarketSegment]] = [
    (keywords("student", "college", "campus", "universit"), STUDENTS),
    (keywords("small business", "local business", "small shop", "smb"), SMALL_BUSINESSES),
    (keywords("enterprise", "corporate", "corporation", "large compan"), ENTERPRISE),
    (keywords("restaurant", "cafe", "food truck", "dining", "kitchen"), RESTAURANTS),
    (keywords("retail", "store", "boutique", "e-commerce", "ecommerce"), RETAIL),
    (keywords("health", "medical", "clinic", "patient", "hospital", "wellness"), HEALTHCARE),
    (keywords("education", "school", "teacher", "classroom", "learning"), EDUCATION),
    (keywords("home-based", "home based", "work from home", "freelance"), HOME_BASED),
]


def first_match(rules, text: str, default):
    """Return the category of the first rule whose predicate matches ``text``."""
    for predicate, category in rules:
        if predicate(text):
            return category
    return default


def classify_business(*texts: str) -> str:
    """Pick the business category for the given concept/solution text."""
    return first_match(BUSINESS_RULES, " ".join(texts), GENERIC)


def infer_market(*texts: str) -> MarketSegment:
    """Pick the target market segment for the given concept/problem text."""
    return first_match(MARKET_RULES, " ".join(texts), DEFAULT_SEGMENT)


# Placeholder detection

PLACEHOLDERS = frozenset({"", "test", "testing", "n/a", "na", "none", "tbd", "asdf", "xxx", "...", "-", "null"})
_BRACKETED = re.compile(r"^\[.*\]$", re.DOTALL)


def clean_text(value: Any) -> str:
    """Coerce an input value to stripped text. None becomes empty."""
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def is_placeholder(value: Any) -> bool:
    """Whether an input carries no real content (empty, sentinel or ``[...]``)."""
    text = clean_text(value)
    return text.lower() in PLACEHOLDERS or bool(_BRACKETED.match(text))
