#!/usr/bin/env python3
"""
Team Extraction - Build a starter roster from transcript speakers.

Segments come from an already-parsed transcript; file formats are handled
elsewhere.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple
import logging

from planner.ranking.models import Capacity, Member

logger = logging.getLogger(__name__)

UNKNOWN_SPEAKER = "Unknown"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_HOURS_PER_SPRINT = 40.0

# Checked in order; the first rule with a matching hint wins.
ROLE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("product", "pm"), "Product Manager"),
    (("design",), "Designer"),
    (("tech lead", "architect"), "Tech Lead"),
    (("frontend", "fe"), "Frontend Engineer"),
    (("backend", "be"), "Backend Engineer"),
    (("fullstack", "full stack"), "Full Stack Engineer"),
    (("devops",), "DevOps Engineer"),
    (("qa", "test"), "QA Engineer"),
    (("engineer", "developer"), "Software Engineer"),
)
DEFAULT_ROLE = "Team Member"


@dataclass(frozen=True)
class TranscriptSegment:
    timestamp: str
    speaker: str
    text: str


def infer_role(speaker: str) -> str:
    """Guess a role from a speaker label such as "Dana (Backend)".

    Hints are plain substrings, so short ones like "pm" or "be" can fire
    inside unrelated names.
    """
    lowered = speaker.lower()
    for hints, role in ROLE_RULES:
        if any(hint in lowered for hint in hints):
            return role
    return DEFAULT_ROLE


def extract_team_from_transcript(segments: Iterable[TranscriptSegment]) -> List[Member]:
    """
    Create one member per unique speaker, in order of first appearance.

    Members start with 40h capacity, no load, and empty skills, history
    and preferences; ids are ``member-1`` .. ``member-n``.
    """
    speakers: List[str] = []
    for segment in segments:
        speaker = segment.speaker.strip()
        if speaker and speaker != UNKNOWN_SPEAKER and speaker not in speakers:
            speakers.append(speaker)

    members = [
        Member(
            id=f"member-{index}",
            name=speaker,
            role=infer_role(speaker),
            timezone=DEFAULT_TIMEZONE,
            capacity=Capacity(hours_per_sprint=DEFAULT_HOURS_PER_SPRINT, current_load=0.0),
        )
        for index, speaker in enumerate(speakers, start=1)
    ]
    logger.info(f"Extracted {len(members)} team members from transcript")
    return members
