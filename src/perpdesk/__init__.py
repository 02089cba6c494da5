"""Confluence scoring and leveraged position sizing for perpetual futures."""

from perpdesk.engine import score_confluence, size_position
from perpdesk.results import ErrorKind, Failure, Outcome

__all__ = ["ErrorKind", "Failure", "Outcome", "score_confluence", "size_position"]
