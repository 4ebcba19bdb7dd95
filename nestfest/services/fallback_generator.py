# -*- coding: utf-8 -*-
"""Template-based content generation used when the AI service is unavailable.

``generate_fallback_content`` turns a content type and a mapping of free-text
inputs into a complete document. Missing or placeholder inputs are replaced
with realistic defaults, and the business category and target market
inferred from the text select the canned paragraphs spliced in. Output is a
pure function of the inputs and ``today``.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from nestfest.services.text_classifier import (
    CONSULTING,
    GENERIC,
    PLATFORM,
    PRODUCT,
    SERVICE,
    MarketSegment,
    classify_business,
    clean_text,
    infer_market,
    is_placeholder,
)

BUSINESS_DESCRIPTION = "business_description"
PITCH_OUTLINE = "pitch_outline"
EXECUTIVE_SUMMARY = "executive_summary"
PRESENTATION_SLIDES = "presentation_slides"

CONTENT_TYPES = (BUSINESS_DESCRIPTION, PITCH_OUTLINE, EXECUTIVE_SUMMARY, PRESENTATION_SLIDES)

CLOSING_LINE = "Ready to turn this vision into reality at NEST FEST!"

SECTION_HEADERS: dict[str, list[str]] = {
    BUSINESS_DESCRIPTION: [
        "BUSINESS CONCEPT",
        "THE PROBLEM WE'RE SOLVING",
        "OUR SOLUTION",
        "MARKET OPPORTUNITY",
        "COMPETITIVE ADVANTAGE",
        "WHAT WE'RE SEEKING",
        "REVENUE MODEL",
        "NEXT STEPS",
    ],
    PITCH_OUTLINE: [
        "NEST FEST PITCH OUTLINE (5 minutes)",
        "1. HOOK & PROBLEM (45 seconds)",
        "2. SOLUTION INTRODUCTION (60 seconds)",
        "3. MARKET OPPORTUNITY (45 seconds)",
        "4. PRODUCT DEMONSTRATION (90 seconds)",
        "5. BUSINESS MODEL & TRACTION (45 seconds)",
        "6. COMPETITIVE ADVANTAGE (30 seconds)",
        "7. FUNDING REQUEST & USE (30 seconds)",
        "8. CALL TO ACTION (15 seconds)",
        "DELIVERY TIPS",
        "SUCCESS METRICS",
    ],
    EXECUTIVE_SUMMARY: [
        "EXECUTIVE SUMMARY",
        "COMPANY OVERVIEW",
        "PROBLEM & MARKET OPPORTUNITY",
        "SOLUTION & VALUE PROPOSITION",
        "COMPETITIVE ADVANTAGE",
        "BUSINESS MODEL & REVENUE STREAMS",
        "FINANCIAL PROJECTIONS",
        "TEAM & EXECUTION",
        "FUNDING REQUEST",
        "INVESTMENT OPPORTUNITY",
        "NEXT STEPS",
    ],
    PRESENTATION_SLIDES: [
        "NEST FEST PRESENTATION SLIDES",
        "SLIDE 1: TITLE SLIDE",
        "SLIDE 2: THE PROBLEM",
        "SLIDE 3: MARKET OPPORTUNITY",
        "SLIDE 4: OUR SOLUTION",
        "SLIDE 5: PRODUCT DEMO",
        "SLIDE 6: BUSINESS MODEL",
        "SLIDE 7: COMPETITIVE ADVANTAGE",
        "SLIDE 8: TRACTION & VALIDATION",
        "SLIDE 9: FINANCIAL PROJECTIONS",
        "SLIDE 10: TEAM",
        "SLIDE 11: FUNDING REQUEST",
        "SLIDE 12: CALL TO ACTION",
        "PRESENTATION TIPS",
        "APPENDIX SLIDES (Have Ready)",
    ],
}

GENERIC_HEADERS = [
    "PROFESSIONAL BUSINESS CONTENT",
    "OVERVIEW",
    "BUSINESS CONCEPT",
    "CHALLENGE ADDRESSED",
    "KEY ELEMENTS",
    "STRATEGIC APPROACH",
    "VALUE PROPOSITION",
    "RESOURCE REQUIREMENTS",
    "NEXT STEPS",
]


@dataclass(frozen=True)
class BusinessProfile:
    """Canned prose for one business category."""

    noun: str
    solution: str
    market_analysis: str
    revenue_streams: tuple[str, ...]
    advantage: str
    demo: str


PROFILES: dict[str, BusinessProfile] = {
    PLATFORM: BusinessProfile(
        noun="digital platform",
        solution="We are building an easy-to-use digital platform that automates the most "
                 "time-consuming parts of this problem. Customers get a clean web and mobile "
                 "experience, real-time updates and onboarding that takes minutes instead of days.",
        market_analysis="Software scales at low marginal cost, and customers increasingly expect "
                        "problems like this to be solved from their phone. Subscription tools in "
                        "this space are growing steadily year over year.",
        revenue_streams=(
            "Monthly subscription tiers (basic, professional, team)",
            "Free trial that converts to a paid plan",
            "Premium features and integrations as add-ons",
        ),
        advantage="A focused, affordable product built around what customers told us they need, "
                  "with faster setup and a friendlier experience than larger, more complex tools.",
        demo="Walk through the core workflow live on a phone or laptop: sign up, complete the "
             "key task and show the result.",
    ),
    CONSULTING: BusinessProfile(
        noun="advisory practice",
        solution="We provide hands-on expert guidance that turns this problem into a clear plan. "
                 "Each client receives an assessment, a practical roadmap and ongoing support "
                 "to carry it out.",
        market_analysis="Organizations pay for outside expertise when the cost of getting things "
                        "wrong is high, and demand for specialized, affordable advisors keeps rising.",
        revenue_streams=(
            "Project-based engagements",
            "Monthly retainers for ongoing support",
            "Workshops and training sessions",
        ),
        advantage="Personal attention and practical, affordable guidance that large firms do not "
                  "offer to smaller clients.",
        demo="Share a before-and-after story from a pilot client, showing the plan we delivered "
             "and the results it produced.",
    ),
    SERVICE: BusinessProfile(
        noun="service business",
        solution="We deliver a reliable, professional service that takes this problem off our "
                 "customers' hands entirely. Clear pricing, easy booking and consistent quality "
                 "make us the obvious choice.",
        market_analysis="Customers pay for convenience and trust, and local service businesses "
                        "with strong reviews grow quickly through referrals.",
        revenue_streams=(
            "Per-job or hourly service fees",
            "Recurring service packages",
            "Premium and rush options",
        ),
        advantage="Dependable, friendly service with transparent pricing and fast response times "
                  "that customers can count on.",
        demo="Show the customer journey from booking to completed job, using photos or a short "
             "video from a real engagement.",
    ),
    PRODUCT: BusinessProfile(
        noun="consumer product",
        solution="We designed a physical product that solves this problem simply and reliably. "
                 "It is affordable to produce, easy to use out of the box and built to last.",
        market_analysis="Shoppers reward products that fix a specific frustration well, and "
                        "direct-to-consumer channels make it possible to reach them without "
                        "large retail deals.",
        revenue_streams=(
            "Direct sales through our online store",
            "Wholesale to local retailers",
            "Accessories, refills and bundles",
        ),
        advantage="A thoughtfully designed product at an accessible price point, refined through "
                  "direct feedback from real customers.",
        demo="Bring the prototype on stage and show it solving the problem in under a minute.",
    ),
    GENERIC: BusinessProfile(
        noun="venture",
        solution="Our solution combines a clear understanding of customer needs with a practical, "
                 "affordable approach that delivers results from day one.",
        market_analysis="Customers facing this problem rely on workarounds that cost time and "
                        "money, leaving room for a focused new offering.",
        revenue_streams=(
            "Direct sales to customers",
            "Recurring service or subscription options",
            "Partnerships that extend our reach",
        ),
        advantage="A customer-first approach, local relationships and the flexibility to adapt "
                  "faster than established competitors.",
        demo="Walk through a real customer scenario from first contact to successful outcome.",
    ),
}

DEFAULTS = {
    "concept": "a new venture that helps people solve an everyday problem more simply and affordably",
    "problem": "Many people and businesses struggle with an everyday problem that wastes time and "
               "money, and today's options are too expensive, too complicated or simply not "
               "built for them.",
    "funding": "$10,000 in seed funding, mentorship and introductions to early customers",
    "business_name": "Our Venture",
    "financials": "We project reaching break-even within 18 months, with revenue growing as we "
                  "expand from our first customers in Central Texas to neighboring markets.",
    "team": "Our founding team combines hands-on knowledge of the problem with the drive to build "
            "a solution, supported by mentors and faculty at Austin Community College.",
}

# Input keys accepted for each field, in lookup order
FIELD_KEYS = {
    "concept": ("concept", "businessIdea", "idea", "description"),
    "problem": ("problem", "problemDescription"),
    "solution": ("solution", "solutionDescription"),
    "market": ("market", "targetMarket"),
    "advantage": ("advantage", "competitiveAdvantage"),
    "funding": ("needs", "funding", "fundingNeeds"),
    "business_name": ("businessName", "name", "companyName"),
    "financials": ("financials", "financialProjections"),
    "team": ("team",),
}


def _pick(inputs: Mapping[str, Any], field: str) -> str | None:
    """First non-placeholder value among the keys accepted for ``field``."""
    for key in FIELD_KEYS[field]:
        value = inputs.get(key)
        if not is_placeholder(value):
            return clean_text(value)
    return None


def _sentence(text: str) -> str:
    """Terminate ``text`` with a period unless it already ends a sentence."""
    return text if text.endswith((".", "!", "?")) else text + "."


def _bullets(items) -> str:
    return "\n".join(f"- {item}" for item in items)


def _section(title: str, *paragraphs: str) -> str:
    return "\n".join([title, "\n\n".join(p for p in paragraphs if p)])


def _format_date(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


@dataclass(frozen=True)
class ContentContext:
    """Inputs resolved to final text plus the inferred classification."""

    concept: str
    problem: str
    solution: str
    market: str
    advantage: str
    funding: str
    business_name: str
    financials: str
    team: str
    category: str
    segment: MarketSegment
    profile: BusinessProfile
    prepared_on: str
    extras: tuple[tuple[str, str], ...]


def build_context(inputs: Any, today: date | None = None) -> ContentContext:
    """Resolve raw inputs into a ContentContext. Never raises."""
    if not isinstance(inputs, Mapping):
        inputs = {}

    concept = _pick(inputs, "concept")
    problem = _pick(inputs, "problem")
    solution = _pick(inputs, "solution")

    category = classify_business(concept or "", solution or "")
    segment = infer_market(concept or "", problem or "")
    profile = PROFILES[category]

    market = _pick(inputs, "market") or f"Our primary market is {segment.label}. {segment.description}"

    extras = tuple(
        (str(key), clean_text(value))
        for key, value in inputs.items()
        if not is_placeholder(value)
    )

    return ContentContext(
        concept=concept or DEFAULTS["concept"],
        problem=problem or DEFAULTS["problem"],
        solution=solution or profile.solution,
        market=market,
        advantage=_pick(inputs, "advantage") or profile.advantage,
        funding=_pick(inputs, "funding") or DEFAULTS["funding"],
        business_name=_pick(inputs, "business_name") or DEFAULTS["business_name"],
        financials=_pick(inputs, "financials") or DEFAULTS["financials"],
        team=_pick(inputs, "team") or DEFAULTS["team"],
        category=category,
        segment=segment,
        profile=profile,
        prepared_on=_format_date(today or date.today()),
        extras=extras,
    )


def _business_description(ctx: ContentContext) -> list[str]:
    headers = SECTION_HEADERS[BUSINESS_DESCRIPTION]
    return [
        _section(headers[0], f"The idea: {_sentence(ctx.concept)}"),
        _section(
            headers[1],
            _sentence(ctx.problem),
            f"This challenge is especially painful for {ctx.segment.label}. {ctx.segment.description}",
        ),
        _section(headers[2], _sentence(ctx.solution)),
        _section(headers[3], _sentence(ctx.market), ctx.segment.sizing, ctx.profile.market_analysis),
        _section(headers[4], _sentence(ctx.advantage)),
        _section(
            headers[5],
            f"We are seeking {_sentence(ctx.funding)}",
            "This support will help us validate the concept with real customers, build our "
            "first version and establish a foundation for sustainable growth.",
        ),
        _section(headers[6], _bullets(ctx.profile.revenue_streams)),
        _section(
            headers[7],
            _bullets([
                "Validate demand through interviews with 25 potential customers",
                f"Launch a pilot with early adopters among {ctx.segment.label}",
                "Refine pricing and operations based on pilot results",
                "Grow through referrals, partnerships and local outreach",
            ]),
        ),
        CLOSING_LINE,
    ]


def _pitch_outline(ctx: ContentContext) -> list[str]:
    headers = SECTION_HEADERS[PITCH_OUTLINE]
    return [
        headers[0],
        _section(
            headers[1],
            _bullets([
                f"Open with a relatable moment: {_sentence(ctx.problem)}",
                "Ask the audience: \"Who here has dealt with this?\"",
                f"Make it concrete for {ctx.segment.label}",
            ]),
        ),
        _section(
            headers[2],
            _bullets([
                f"Introduce {ctx.business_name}: {_sentence(ctx.concept)}",
                f"How it works: {_sentence(ctx.solution)}",
            ]),
        ),
        _section(headers[3], _bullets([_sentence(ctx.market), ctx.segment.sizing])),
        _section(headers[4], _bullets([ctx.profile.demo, "Highlight the moment the problem disappears"])),
        _section(
            headers[5],
            _bullets([
                "Revenue streams: " + "; ".join(ctx.profile.revenue_streams),
                "Share early validation: interviews, sign-ups or pilot results",
            ]),
        ),
        _section(headers[6], _bullets([_sentence(ctx.advantage)])),
        _section(
            headers[7],
            _bullets([
                f"We are seeking {_sentence(ctx.funding)}",
                "Use of funds: product development, marketing and operations",
            ]),
        ),
        _section(
            headers[8],
            _bullets([
                "Restate the vision in one sentence",
                "Invite judges and mentors to join the journey",
            ]),
        ),
        _section(
            headers[9],
            _bullets([
                "Practice until the timing is natural, aiming for 4.5 minutes",
                "Make eye contact across the room",
                "Pause after key numbers",
                "Close with energy and a clear ask",
            ]),
        ),
        _section(
            headers[10],
            _bullets([
                "Judges can repeat the problem and solution in one sentence",
                "The ask is specific and memorable",
                "At least one follow-up conversation after the pitch",
            ]),
        ),
    ]


def _executive_summary(ctx: ContentContext) -> list[str]:
    headers = SECTION_HEADERS[EXECUTIVE_SUMMARY]
    return [
        _section(headers[0], f"{ctx.business_name} | Prepared for NEST FEST on {ctx.prepared_on}"),
        _section(
            headers[1],
            f"{ctx.business_name} is a {ctx.profile.noun} focused on {ctx.segment.label}. "
            f"Concept: {_sentence(ctx.concept)}",
        ),
        _section(headers[2], _sentence(ctx.problem), _sentence(ctx.market), ctx.segment.sizing),
        _section(headers[3], _sentence(ctx.solution)),
        _section(headers[4], _sentence(ctx.advantage)),
        _section(headers[5], ctx.profile.market_analysis, _bullets(ctx.profile.revenue_streams)),
        _section(headers[6], _sentence(ctx.financials)),
        _section(headers[7], _sentence(ctx.team)),
        _section(headers[8], f"We are seeking {_sentence(ctx.funding)}"),
        _section(
            headers[9],
            f"Supporting {ctx.business_name} means backing a committed student team addressing a "
            f"real need among {ctx.segment.label}, with a clear path to revenue and local impact.",
        ),
        _section(
            headers[10],
            _bullets([
                "Complete customer discovery and pilot launch",
                "Secure first paying customers",
                "Measure results and prepare for growth",
            ]),
        ),
    ]


def _presentation_slides(ctx: ContentContext) -> list[str]:
    headers = SECTION_HEADERS[PRESENTATION_SLIDES]
    return [
        headers[0],
        _section(headers[1], _bullets([ctx.business_name, _sentence(ctx.concept), "Presented at NEST FEST"])),
        _section(headers[2], _bullets([_sentence(ctx.problem), f"Who feels it most: {ctx.segment.label}"])),
        _section(headers[3], _bullets([_sentence(ctx.market), ctx.segment.sizing])),
        _section(headers[4], _bullets([_sentence(ctx.solution)])),
        _section(headers[5], _bullets([ctx.profile.demo])),
        _section(headers[6], _bullets(ctx.profile.revenue_streams)),
        _section(headers[7], _bullets([_sentence(ctx.advantage)])),
        _section(
            headers[8],
            _bullets([
                "Customer interviews and survey results",
                "Pilot users, sign-ups or letters of intent",
                "Mentor and community feedback",
            ]),
        ),
        _section(headers[9], _bullets([_sentence(ctx.financials)])),
        _section(headers[10], _bullets([_sentence(ctx.team)])),
        _section(headers[11], _bullets([f"We are seeking {_sentence(ctx.funding)}"])),
        _section(headers[12], _bullets(["Join us in bringing this to market", "Thank you!"])),
        _section(
            headers[13],
            _bullets([
                "One idea per slide with large, readable text",
                "Use visuals instead of paragraphs",
                "Rehearse transitions between slides",
            ]),
        ),
        _section(
            headers[14],
            _bullets([
                "Detailed financial model",
                "Competitor comparison table",
                "Customer research summary",
            ]),
        ),
    ]


def _humanize_key(key: str) -> str:
    """``businessName`` -> ``Business Name``."""
    words, current = [], ""
    for char in key.replace("_", " "):
        if char.isupper() and current and not current.endswith(" "):
            words.append(current)
            current = char
        else:
            current += char
    words.append(current)
    return " ".join(w.strip().capitalize() for w in words if w.strip())


def _generic(ctx: ContentContext) -> list[str]:
    h = GENERIC_HEADERS
    elements = [f"{_humanize_key(key)}: {value}" for key, value in ctx.extras]
    if not elements:
        elements = [f"Concept: {ctx.concept}", f"Focus: {ctx.segment.label}"]
    return [
        h[0],
        _section(
            h[1],
            f"This document outlines {ctx.business_name}, a {ctx.profile.noun} serving "
            f"{ctx.segment.label}.",
        ),
        _section(h[2], _sentence(ctx.concept)),
        _section(h[3], _sentence(ctx.problem)),
        _section(h[4], _bullets(elements)),
        _section(h[5], _sentence(ctx.solution), ctx.profile.market_analysis),
        _section(h[6], _sentence(ctx.advantage)),
        _section(h[7], f"We are seeking {_sentence(ctx.funding)}"),
        _section(
            h[8],
            _bullets([
                "Validate the concept with potential customers",
                "Build and test a first version",
                "Launch and gather feedback",
            ]),
        ),
        CLOSING_LINE,
    ]


_BUILDERS = {
    BUSINESS_DESCRIPTION: _business_description,
    PITCH_OUTLINE: _pitch_outline,
    EXECUTIVE_SUMMARY: _executive_summary,
    PRESENTATION_SLIDES: _presentation_slides,
}


def headers_for(content_type: Any) -> list[str]:
    """Ordered section headers the document for ``content_type`` contains."""
    return SECTION_HEADERS.get(content_type, GENERIC_HEADERS) if isinstance(content_type, str) else GENERIC_HEADERS


def generate_fallback_content(content_type: Any, inputs: Any, today: date | None = None) -> str:
    """Generate a complete document without calling any external service.

    Args:
        content_type: One of CONTENT_TYPES. Anything else yields the generic template.
        inputs: Mapping of free-text fields. Non-mappings are treated as empty.
        today: Date printed in dated sections. Defaults to the current date.

    Returns:
        The formatted document.
    """
    ctx = build_context(inputs, today)
    builder = _BUILDERS.get(content_type, _generic) if isinstance(content_type, str) else _generic
    return "\n\n".join(builder(ctx)).strip() + "\n"
