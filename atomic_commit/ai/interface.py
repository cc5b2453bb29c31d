"""
Abstract interface for AI-assisted planning in atomic-commit.

This module defines the protocol that concrete text generation clients
must implement. Keeping this separate from any specific provider makes
it easy to plug in different backends or a scripted fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List


class TextGenerator(ABC):
    """
    Abstract interface for text generation backends.
    """

    @abstractmethod
    def generate(self, transcript: List[Dict[str, str]]) -> str:
        """
        Given a conversation transcript, return the model's reply.

        The transcript is a list of {"role", "content"} dicts. The reply
        is expected to contain a JSON-encoded commit plan, but validating
        it is the caller's job.
        """
