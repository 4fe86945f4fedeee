#!/usr/bin/env python3
"""
Planner exceptions.

Raised at the boundaries of the ranking engine: input validation and the
LLM-backed ranking path. The local heuristic scorer never raises on
well-typed input.
"""


class PlannerException(Exception):
    """Base exception for planner errors."""
    pass


class InvalidArgument(PlannerException):
    """Raised when ranking input is malformed (empty roster, bad weights, ...)."""
    pass


class UnparsableResponse(PlannerException):
    """Raised when an external ranking response is not in the expected form."""
    pass


class UnknownMemberReference(PlannerException):
    """Raised (strict mode only) when a ranking references an unknown member id."""

    def __init__(self, member_id: str):
        super().__init__(f"Ranking references unknown member id: {member_id}")
        self.member_id = member_id


class RankingUnavailable(PlannerException):
    """Raised when the external ranking source fails after retries."""
    pass
