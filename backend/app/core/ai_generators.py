"""
AI agents for the investor-deck interview.

Agents
------
- **interview_agent**  – Conducts the category-by-category interview and
  reports progress as a structured ``InterviewTurn``.
- **extraction_agent** – Reads a whole transcript and returns every project
  value it states.

Utility helpers build the agent prompts and normalise the outputs.
"""

import json
import logging
from collections.abc import Iterable, Mapping

from pydantic_ai import Agent

from app.core.config import settings
from app.schemas.extraction import ExtractionResult, InterviewTurn
from app.schemas.project_data import CATEGORY_FIELDS, CATEGORY_LABELS, CATEGORY_ORDER, ProjectData

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1.  Interview agent
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """\
You are an expert real estate investment analyst and pitch deck strategist specializing \
in healthcare real estate, particularly skilled nursing facilities (SNF), assisted living \
facilities (ALF), and residential care facilities for the elderly (RCFE).

Your role is to gather comprehensive information from a real estate developer to create a \
professional investor deck for raising capital from Limited Partners (LPs).

## Your approach

1. Ask questions ONE CATEGORY AT A TIME in a conversational, professional manner
2. Start with the most important questions, then gather supporting details
3. Validate responses; if something seems unrealistic (e.g. 50% IRR), politely ask for clarification
4. Explain what investors look for when it helps the user answer
5. Be encouraging but professional; this is a serious capital raise

## Categories (in order)

### site: SITE & PROPERTY
Essential: property address, lot size, zoning classification, entitlement status
Important: land owned or under contract, purchase price or current basis

### development: DEVELOPMENT PLAN
Essential: facility type (SNF/ALF/RCFE), bed count, total project cost
Important: construction timeline, contractor identified, license status

### market: MARKET ANALYSIS
Essential: target market demographics (65+ population), competitor analysis
Important: market occupancy, average daily rates, demand drivers

### financials: FINANCIALS
Essential: total raise, projected NOI, IRR, equity multiple
Important: going-in and exit cap rates, cash-on-cash, hold period

### team: TEAM & TRACK RECORD
Essential: sponsor name, healthcare real estate experience, prior deal returns
Important: AUM, GP co-invest, operator and management team

### terms: DEAL TERMS
Essential: minimum investment, preferred return, waterfall structure
Important: fees, distribution frequency, exit strategy

## Response format

- Ask 2-4 related questions at once
- Use bullet points for clarity
- Acknowledge answers before moving on
- If the user is unsure, offer industry benchmarks

## Structured output

- ``response``: your message to the user.
- ``completed_categories``: the ids (site, development, market, financials, team, \
terms) of every category whose essential questions are answered.
- ``all_complete``: true only when all six categories are complete; then tell the \
user they are ready to generate the investor deck.
- ``project_data``: every value the user has stated, as short display strings \
("$1.5M", "72", "8%"). Never invent values.

## Key metrics to validate

- IRR: 12-25% is realistic for development; flag 30%+
- Preferred return: 6-10% is standard
- Cap rates: SNF typically 10-14%; flag sub-8%
- Hold period: 3-7 years is typical; flag under 2 years
- GP co-invest: 3-10% shows skin in the game

## Tone

Professional but warm. Be thorough but not tedious."""

INITIAL_MESSAGE = """\
Welcome! I'm here to help you create a professional investor deck for your real estate \
development project.

I'll walk you through a series of questions to gather everything investors need to see. \
The whole process takes about 10-15 minutes, and you'll get a polished, professional \
PowerPoint deck at the end.

**Before we start, please make sure you've uploaded your company logo and selected your \
brand colors.**

Let's begin with the basics about your property.

• What is the **property address** or location for this development?
• What is the **lot size** (in acres or square feet)?
• What is the current **zoning classification**, and is the property already entitled for \
healthcare/residential care use?"""

interview_agent = Agent(
    model=settings.CHAT_MODEL,
    output_type=InterviewTurn,
    system_prompt=SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 2.  Extraction agent
# ---------------------------------------------------------------------------

_EXTRACTION_SYSTEM_PROMPT = """\
You extract structured project data from an interview between an analyst and a real \
estate developer.

Only include fields that have actual values mentioned in the conversation. Do not \
guess or make up data. Keep values as short display strings with their units \
("$1.5M", "72", "8%", "2.1x", "5 years"). List-like answers such as demand drivers \
are a single comma-separated string."""

extraction_agent = Agent(
    model=settings.EXTRACTION_MODEL,
    output_type=ExtractionResult,
    system_prompt=_EXTRACTION_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ===================================================================
# Utility functions
# ===================================================================

def format_transcript(messages: Iterable[Mapping[str, str]]) -> str:
    """Render ``[{role, content}, ...]`` as ``role: content`` lines."""
    return "\n\n".join(f"{m['role']}: {m['content']}" for m in messages)


def describe_collected(data: ProjectData) -> str:
    """Summarise populated values by category for the agent context."""
    populated = data.populated()
    sections = []
    for category in CATEGORY_ORDER:
        lines = [f"- {key}: {populated[key]}" for key in CATEGORY_FIELDS[category] if key in populated]
        if lines:
            sections.append(f"{CATEGORY_LABELS[category]}:\n" + "\n".join(lines))
    return "\n\n".join(sections) or "(nothing yet)"


def build_interview_context(
    history: Iterable[Mapping[str, str]],
    data: ProjectData,
    completed: Iterable[str],
    content: str,
) -> str:
    """Assemble the single-string prompt for one interview turn.

    Parameters
    ----------
    history:
        Earlier messages as ``{role, content}`` mappings, oldest first.
    data:
        The values collected so far.
    completed:
        Category ids already marked complete.
    content:
        The new user message.
    """
    transcript = format_transcript(history) or "(no messages yet)"
    return (
        f"Conversation so far:\n{transcript}\n\n"
        f"Data collected so far:\n{describe_collected(data)}\n\n"
        f"Completed categories: {json.dumps(sorted(set(completed)))}\n\n"
        f"User message: {content}"
    )


async def run_interview_turn(
    history: Iterable[Mapping[str, str]],
    data: ProjectData,
    completed: Iterable[str],
    content: str,
) -> InterviewTurn:
    """Run the interview agent once.  Agent errors propagate to the caller."""
    context = build_interview_context(history, data, completed, content)
    result = await interview_agent.run(context)
    return result.output


async def extract_project_data(messages: Iterable[Mapping[str, str]]) -> ProjectData:
    """
    Pull every stated project value out of a transcript.

    Never raises: on any agent failure an empty ``ProjectData`` is returned
    and the failure is logged.
    """
    transcript = format_transcript(messages)
    if not transcript:
        return ProjectData()

    try:
        result = await extraction_agent.run(f"CONVERSATION:\n{transcript}")
    except Exception:
        logger.exception("Project data extraction failed")
        return ProjectData()

    extracted = result.output.project_data
    logger.debug("Extracted %d fields from transcript", len(extracted.populated()))
    return extracted
