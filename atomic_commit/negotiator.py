"""
Accept/refine loop that converges on a commit plan the developer approves.

The negotiator is an explicit state machine:

    DRAFTING -> PROPOSED -> ACCEPTED
                         -> REFINING -> DRAFTING

DRAFTING sends the whole conversation to the text generation backend
and parses the reply. PROPOSED shows the commit messages and asks for
approval. REFINING collects new instructions from the developer. There
is no limit on rounds; the cancellation event is checked before every
transition, so a cancelled run stops at the next step without executing
anything.
"""

from __future__ import annotations

import logging
import sys
import threading
from enum import Enum
from typing import Optional, TextIO

from .ai.interface import TextGenerator
from .domain import CommitPlan, Conversation, Role
from .errors import WorkflowCancelled
from .plan_format import parse_commit_plan, render_plan_summary
from .review import Prompter

LOG = logging.getLogger(__name__)

CONFIRM_PROMPT = "Do you want to commit these changes?"
REFINE_PROMPT = ">>> "


class NegotiationState(str, Enum):
    DRAFTING = "drafting"
    PROPOSED = "proposed"
    REFINING = "refining"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


class PlanNegotiator:
    def __init__(
        self,
        generator: TextGenerator,
        prompter: Prompter,
        conversation: Conversation,
        cancel_event: Optional[threading.Event] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        self.generator = generator
        self.prompter = prompter
        self.conversation = conversation
        self.cancel_event = cancel_event or threading.Event()
        self.out = out or sys.stdout
        self.state = NegotiationState.DRAFTING
        self.rounds = 0
        self.plan: Optional[CommitPlan] = None

    def negotiate(self) -> CommitPlan:
        """
        Run rounds until the developer accepts a plan, then return it.

        Raises PlanFormatError when the backend reply is not a valid plan
        and WorkflowCancelled when the cancellation event is set.
        """

        self.state = NegotiationState.DRAFTING
        while True:
            self._check_cancelled()
            plan = self._draft()

            self._check_cancelled()
            if self._propose(plan):
                return plan

            self._check_cancelled()
            self._refine()

    def _draft(self) -> CommitPlan:
        self.rounds += 1
        LOG.info("Creating commit plan (round %d)", self.rounds)
        response = self.generator.generate(self.conversation.to_transcript())
        LOG.debug("Raw commit plan: %s", response)

        plan = parse_commit_plan(response)
        self.conversation.add(Role.ASSISTANT, response)
        if not plan.actions:
            LOG.warning("The proposed commit plan contains no actions")
        self.plan = plan
        self.state = NegotiationState.PROPOSED
        return plan

    def _propose(self, plan: CommitPlan) -> bool:
        self.out.write("\n".join(render_plan_summary(plan)) + "\n")
        self.out.flush()

        if self.prompter.confirm(CONFIRM_PROMPT, True):
            self.state = NegotiationState.ACCEPTED
            return True
        self.state = NegotiationState.REFINING
        return False

    def _refine(self) -> None:
        instructions = self.prompter.read_line(REFINE_PROMPT)
        # Plans are replaced wholesale by the next draft, never merged.
        self.plan = None
        self.conversation.add(Role.USER, instructions)
        self.state = NegotiationState.DRAFTING

    def _check_cancelled(self) -> None:
        if self.cancel_event.is_set():
            self.state = NegotiationState.CANCELLED
            self.plan = None
            raise WorkflowCancelled("plan negotiation was cancelled")
