# -*- coding: utf-8 -*-
"""Subjects and plain HTML bodies for confirmation emails."""

from html import escape

REGISTRATION_SUBJECT = "NEST FEST Registration Confirmed"
COACHING_SUBJECT = "Your AI Presentation Coaching Session - NEST FEST"

# Per involvement type: (heading, intro, next steps)
INVOLVEMENT_DETAILS: dict[str, tuple[str, str, list[str]]] = {
    "Entrepreneur": (
        "Next Steps for Entrepreneurs",
        "We're excited that you want to pitch at Nest Fest!",
        [
            "Submit your business idea through the registration form",
            "Try the AI coaching tool to prepare your pitch",
            "Watch for workshop dates and mentor office hours",
        ],
    ),
    "Mentor": (
        "What to Expect as a Mentor",
        "Thank you for offering to share your experience with student founders.",
        [
            "We'll match you with teams that fit your expertise",
            "Mentoring sessions run in the weeks before the event",
            "You'll receive a mentor guide before your first session",
        ],
    ),
    "Volunteer": (
        "Volunteer Opportunities",
        "Volunteers are the backbone of Nest Fest! Your support creates a great experience for everyone.",
        [
            "Event setup and registration desk",
            "Guiding guests and presenters",
            "Helping with tech and timing during pitches",
        ],
    ),
    "Judge/Investor": (
        "Judge/Investor Responsibilities",
        "Thank you for helping us evaluate and support student ventures.",
        [
            "Review pitch materials shared before the event",
            "Score pitches on the provided rubric",
            "Share feedback with teams after the session",
        ],
    ),
    "Sponsor": (
        "Sponsorship Benefits",
        "Thank you for your interest in supporting Nest Fest.",
        [
            "Brand recognition at the event and online",
            "Direct connections with student entrepreneurs",
            "Opportunities to present awards and prizes",
        ],
    ),
    "Audience": (
        "Event Information",
        "We can't wait to see you in the audience!",
        [
            "Watch your inbox for the event schedule",
            "Bring friends: attendance is free",
            "Vote for your favorite pitch during the event",
        ],
    ),
}


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n<html lang=\"en\">\n<head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title></head>\n<body>\n{body}\n</body>\n</html>"
    )


def _list(items: list[str]) -> str:
    return "<ul>" + "".join(f"<li>{escape(item)}</li>" for item in items) + "</ul>"


def participation_subject(involvement_type: str) -> str:
    return f"Nest Fest {involvement_type} Interest Confirmed"


def registration_email(full_name: str, business_name: str, site_url: str) -> str:
    body = "\n".join([
        "<h1>NEST FEST</h1>",
        f"<h2>Hello {escape(full_name)}!</h2>",
        f"<p>Thank you for registering <strong>{escape(business_name)}</strong> for NEST FEST. "
        "We've received your submission.</p>",
        "<h3>What's Next?</h3>",
        _list([
            "Our team will review your submission",
            "You'll receive updates about workshops and pitch preparation",
            "Use the AI coaching tool to get your pitch ready",
        ]),
        f"<p><a href=\"{escape(site_url)}\">{escape(site_url)}</a></p>",
    ])
    return _page(REGISTRATION_SUBJECT, body)


def participation_email(full_name: str, involvement_type: str, questions: str, site_url: str) -> str:
    heading, intro, steps = INVOLVEMENT_DETAILS.get(
        involvement_type, INVOLVEMENT_DETAILS["Audience"]
    )
    parts = [
        "<h1>Nest Fest</h1>",
        f"<h2>Hello {escape(full_name)}!</h2>",
        f"<p>{escape(intro)}</p>",
        f"<h3>{escape(heading)}:</h3>",
        _list(steps),
    ]
    if questions:
        parts += [
            "<h3>Your Questions</h3>",
            f"<p>{escape(questions)}</p>",
            "<p>We'll follow up with answers soon.</p>",
        ]
    parts.append(f"<p><a href=\"{escape(site_url)}\">{escape(site_url)}</a></p>")
    return _page(participation_subject(involvement_type), "\n".join(parts))


def coaching_email(student_name: str, business_idea: str, session_id: str, session_date: str) -> str:
    body = "\n".join([
        "<h1>AI Presentation Coaching</h1>",
        "<p>Your personalized coaching materials are ready!</p>",
        f"<h2>Hello {escape(student_name)}!</h2>",
        "<p>Congratulations on completing your AI presentation coaching session.</p>",
        "<h3>Session Details</h3>",
        f"<p><strong>Date:</strong> {escape(session_date)}</p>",
        f"<p><strong>Session ID:</strong> {escape(session_id)}</p>",
        f"<p><strong>Business Idea:</strong> {escape(business_idea)}</p>",
        "<h3>Your Coaching Materials</h3>",
        "<ol>"
        "<li>Elevator Pitch</li>"
        "<li>Presentation Outline</li>"
        "<li>Speaker Notes</li>"
        "<li>Q&amp;A Preparation</li>"
        "</ol>",
        "<p>To access them again, contact the NEST FEST team with your session ID: "
        f"<strong>{escape(session_id)}</strong></p>",
    ])
    return _page(COACHING_SUBJECT, body)
