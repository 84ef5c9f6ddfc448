"""
Deterministic HTML renderers for transactional emails.

Every renderer returns a ``(subject, html)`` pair.  All interpolated values
are escaped.
"""

from __future__ import annotations

import html as html_mod

from app.core.field_resolver import resolve_field
from app.schemas.project_data import ProjectData

_STYLE = """
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
           line-height: 1.6; color: #1e293b; background: #f8fafc; margin: 0; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    h1 { color: #003B75; }
    .card { background: #ffffff; border-radius: 12px; padding: 20px; margin: 20px 0; }
    .button { background: #003B75; color: #ffffff !important; padding: 12px 24px;
              text-decoration: none; border-radius: 8px; display: inline-block;
              margin: 10px 5px 10px 0; }
    .muted { color: #64748b; font-size: 13px; }
"""


def _e(text: str | None) -> str:
    """HTML-escape helper."""
    return html_mod.escape(text or "")


def _page(body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><style>{_STYLE}</style></head>
<body>
  <div class="container">
    {body}
    <hr style="border: none; border-top: 1px solid #e2e8f0; margin: 30px 0;">
    <p class="muted">Generated by Investor Deck Wizard<br>This is an automated message.</p>
  </div>
</body>
</html>
"""


def _project_summary(data: ProjectData) -> str:
    values = data.populated()
    rows = [
        ("Location", resolve_field(values, "property_address", "Southern California", ("market_location",))),
        ("Facility Type", resolve_field(values, "facility_type")),
        ("Total Raise", resolve_field(values, "total_raise")),
        ("Projected IRR", resolve_field(values, "projected_irr")),
    ]
    items = "\n".join(f"<li><strong>{_e(label)}:</strong> {_e(value)}</li>" for label, value in rows)
    return f"""
    <div class="card">
      <h3>Project Summary</h3>
      <ul>{items}</ul>
    </div>"""


def render_deck_ready(data: ProjectData, gamma_url: str | None, export_url: str | None) -> tuple[str, str]:
    name = data.project_name or "Investment Opportunity"
    links = []
    if gamma_url:
        links.append(f'<a href="{_e(gamma_url)}" class="button">View &amp; Edit Online</a>')
    if export_url:
        links.append(f'<a href="{_e(export_url)}" class="button">Download PowerPoint</a>')

    body = f"""
    <h1>Your Investor Deck is Ready!</h1>
    <p>Your professional investor deck for <strong>{_e(name)}</strong> has been generated.</p>
    <div class="card">
      <h3>Quick Links</h3>
      <p>{' '.join(links)}</p>
    </div>
    {_project_summary(data)}
    <p class="muted">The PowerPoint download link expires after a short time. Please download it promptly.</p>"""
    return f"Your Investor Deck is Ready: {name}", _page(body)


def render_deck_link(project_name: str, export_url: str, data: ProjectData) -> tuple[str, str]:
    body = f"""
    <h1>Your Investor Deck</h1>
    <p>Here is the download link for <strong>{_e(project_name)}</strong>.</p>
    <div class="card" style="text-align: center;">
      <a href="{_e(export_url)}" class="button">Download PowerPoint</a>
    </div>
    {_project_summary(data)}
    <p class="muted">The download link expires after a short time. Please download it promptly.</p>"""
    return f"Your Investor Deck: {project_name}", _page(body)


def render_deck_error(project_name: str, reason: str) -> tuple[str, str]:
    body = f"""
    <h1>Issue with your Investor Deck</h1>
    <p>We ran into a problem while generating the deck for <strong>{_e(project_name)}</strong>.</p>
    <div class="card">
      <p><strong>Details:</strong> {_e(reason)}</p>
    </div>
    <p>Please return to the wizard and try again. Your answers have been kept.</p>"""
    return "Issue with your Investor Deck", _page(body)


def render_feedback(category: str, feedback: str, project_name: str | None, submitted_at: str) -> tuple[str, str]:
    project = project_name or "Unknown Project"
    body = f"""
    <h2>New Feedback</h2>
    <p><strong>Category:</strong> {_e(category)}</p>
    <p><strong>Project:</strong> {_e(project)}</p>
    <p><strong>Feedback:</strong></p>
    <p>{_e(feedback)}</p>
    <p class="muted">Submitted: {_e(submitted_at)}</p>"""
    return f"Feedback: {category} - {project}", _page(body)
