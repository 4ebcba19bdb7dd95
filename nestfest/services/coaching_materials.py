# -*- coding: utf-8 -*-
"""Presentation coaching materials generated from a student's pitch details.

Produces the four texts shown in the coaching tool: an elevator pitch, a
presentation outline, speaker confidence notes and a Q&A preparation guide.
"""

from typing import Any, Mapping

from nestfest.services.text_classifier import clean_text, infer_market, is_placeholder

MATERIAL_KEYS = ("elevator", "presentation", "notes", "qa")

COACHING_DEFAULTS = {
    "studentName": "Student",
    "studentMajor": "Business",
    "businessIdea": "our innovative business concept",
    "problemDescription": "a significant market challenge",
    "solutionDescription": "our comprehensive solution",
    "fundingNeeds": "support and mentorship",
}


def _resolve(inputs: Any) -> dict[str, str]:
    if not isinstance(inputs, Mapping):
        inputs = {}
    return {
        key: default if is_placeholder(inputs.get(key)) else clean_text(inputs.get(key))
        for key, default in COACHING_DEFAULTS.items()
    }


def _capitalized(text: str) -> str:
    return text[:1].upper() + text[1:]


def _ended(text: str) -> str:
    return text if text.endswith((".", "!", "?")) else text + "."


def _with_article(noun: str) -> str:
    return f"an {noun}" if noun[:1].lower() in "aeiou" else f"a {noun}"


def elevator_pitch(data: dict[str, str]) -> str:
    audience = infer_market(data["businessIdea"], data["problemDescription"]).label
    return "\n\n".join([
        f"Hi, I'm {data['studentName']}, {_with_article(data['studentMajor'])} student with a plan to make "
        f"life easier for {audience}.",
        _ended(_capitalized(data["businessIdea"])),
        f"The problem is clear: {_ended(data['problemDescription'])} It creates real barriers "
        f"for people and businesses in our community.",
        f"Our solution is practical: {_ended(data['solutionDescription'])}",
        f"We're seeking {_ended(data['fundingNeeds'])} With that support we can launch, serve "
        f"our first customers and show measurable impact.",
    ])


def presentation_outline(data: dict[str, str]) -> str:
    name = data["studentName"]
    return "\n".join([
        f"NEST FEST PRESENTATION OUTLINE - {name}",
        "",
        "HOOK & INTRODUCTION (30 seconds)",
        f"   - \"Hi, I'm {name}, {_with_article(data['studentMajor'])} student, and I'm here to solve a problem.\"",
        f"   - Business concept: {data['businessIdea']}",
        "",
        "THE PROBLEM (60 seconds)",
        f"   - The challenge: {data['problemDescription']}",
        "   - Real impact: who is affected and what it costs them",
        "   - Why now: the need for affordable, accessible solutions",
        "",
        "OUR SOLUTION (90 seconds)",
        f"   - Our approach: {data['solutionDescription']}",
        "   - Key benefits: affordability, personal attention, community focus",
        "",
        "BUSINESS MODEL & TRACTION (45 seconds)",
        "   - Revenue streams and target customers",
        "   - Early validation from research and conversations",
        "",
        "WHAT WE'RE SEEKING (60 seconds)",
        f"   - Request: {data['fundingNeeds']}",
        "   - Use of funds: people, tools, marketing, operations",
        "   - Milestones for the next three months",
        "",
        "CLOSING & CALL TO ACTION (30 seconds)",
        "   - Restate the vision",
        f"   - \"Thank you! I'm {name}, and I'd love to talk after the session.\"",
        "",
        "DELIVERY TIPS:",
        "- Make eye contact with different audience members",
        "- Pause after important statements",
        "- Aim for 4.5 minutes to leave a buffer",
    ])


def speaker_notes(data: dict[str, str]) -> str:
    return "\n".join([
        f"SPEAKER CONFIDENCE NOTES FOR {data['studentName']}",
        "",
        "BEFORE YOU START:",
        "- Take five slow breaths and picture the room going well",
        "- Everyone in the audience wants student founders to succeed",
        "",
        "KEY TALKING POINTS:",
        f"- Community impact: \"{_ended(_capitalized(data['problemDescription']))}\"",
        f"- Practical solution: \"{_ended(_capitalized(data['solutionDescription']))}\"",
        "- Student advantage: fresh perspective and affordable delivery",
        "",
        "ENERGY & DELIVERY:",
        "- Open with conviction, not an apology",
        "- Use concrete numbers when you have them",
        "- Finish with your ask and a confident thank-you",
        "",
        "IF YOU LOSE YOUR PLACE:",
        "- Say \"Let me emphasize the most important point\" and restate your main benefit",
        "- Pause, smile and continue; there is no need to apologize",
    ])


def qa_preparation(data: dict[str, str]) -> str:
    return "\n".join([
        f"Q&A PREPARATION GUIDE FOR {data['studentName']}",
        "",
        "Q: How do you plan to make money?",
        "A: Explain your main revenue stream, your price point and when you expect your first "
        "paying customers.",
        "",
        "Q: Who are your competitors?",
        f"A: Name the alternatives people use today and explain why {data['businessIdea']} "
        "is a better fit for them.",
        "",
        "Q: How much funding do you need and why?",
        f"A: We're seeking {_ended(data['fundingNeeds'])} Break down how each part of it "
        "moves the business forward.",
        "",
        "Q: What's your biggest challenge?",
        "A: Be honest, then describe the concrete step you are taking to address it.",
        "",
        "Q: How is this scalable?",
        "A: Describe how the model grows once it works for your first customers.",
        "",
        "ANSWER FORMULA:",
        "1. Thank them for the question",
        "2. Answer directly",
        "3. Add one supporting fact",
        "4. Bridge back to your core message",
    ])


def generate_coaching_materials(inputs: Any) -> dict[str, str]:
    """Build all coaching materials. Missing fields fall back to neutral defaults."""
    data = _resolve(inputs)
    return {
        "elevator": elevator_pitch(data),
        "presentation": presentation_outline(data),
        "notes": speaker_notes(data),
        "qa": qa_preparation(data),
    }
