#!/usr/bin/env python3
"""
Keyword Extraction - Salient terms from a story's text fields and labels.
"""

import re
from typing import FrozenSet

from planner.ranking.models import Story

# ASCII word characters only; accented letters act as separators.
_NON_WORD = re.compile(r'\W+', re.ASCII)

# Tokens of this length or shorter are dropped ("the", "for", "and", ...).
MIN_TOKEN_EXCLUSIVE = 3


def extract_keywords(story: Story) -> FrozenSet[str]:
    """Return the lowercase tokens longer than three characters.

    The blob is ``as_a``, ``i_want``, ``so_that`` and the space-joined
    labels, lowercased and split on runs of non-word characters.
    """
    text = f"{story.as_a} {story.i_want} {story.so_that} {' '.join(story.labels)}"
    return frozenset(
        token for token in _NON_WORD.split(text.lower())
        if len(token) > MIN_TOKEN_EXCLUSIVE
    )
