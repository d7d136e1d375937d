"""Analyzers for conversation quality scoring."""

from .scorer import ConversationScorer, score

__all__ = ["ConversationScorer", "score"]
