from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .meta_keys import DIFF_ORDER, FILENAME
from .models import ExistingTags
from .prompt_io import PromptIO
from .prompting import PromptOption, edit_tags, select
from .proposal import TagProposal
from .templates import DEFAULT_FILENAME_TEMPLATE, DEFAULT_TITLE_TEMPLATE

logger = logging.getLogger(__name__)

ACCEPT_PROMPT = "Accept these changes?"
LABEL_WIDTH = 15


class SessionState(Enum):
    PRESENT = "present"
    EDIT = "edit"
    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(slots=True)
class SessionResult:
    state: SessionState
    proposal: TagProposal
    accept_all: bool = False

    @property
    def accepted(self) -> bool:
        return self.state is SessionState.ACCEPT


def format_change(name: str, old: Optional[str], new: Optional[str]) -> str:
    if old is None:
        if new is None:
            return f"{name:<{LABEL_WIDTH}} N/A"
        return f"{name:<{LABEL_WIDTH}} N/A -> {new}"
    if new is None or new == old:
        return f"{name:<{LABEL_WIDTH}} {old} -> unchanged"
    return f"{name:<{LABEL_WIDTH}} {old} -> {new}"


class ProposalSession:
    """Present a proposal for one file until the user accepts or rejects it.

    The session never touches the file; the caller persists the proposal
    when the result is accepted.
    """

    def __init__(
        self,
        proposal: TagProposal,
        *,
        prompt_io: PromptIO,
        existing: Optional[ExistingTags] = None,
        current_filename: Optional[str] = None,
        suffix: str = "",
        title_template: str = DEFAULT_TITLE_TEMPLATE,
        filename_template: str = DEFAULT_FILENAME_TEMPLATE,
        default: PromptOption = PromptOption.YES,
        allow_accept_all: bool = False,
    ) -> None:
        self.proposal = proposal
        self.prompt_io = prompt_io
        self.existing = existing or ExistingTags()
        self.current_filename = current_filename
        self.suffix = suffix
        self.title_template = title_template
        self.filename_template = filename_template
        self.options: List[PromptOption] = [PromptOption.YES, PromptOption.NO, PromptOption.EDIT]
        if allow_accept_all:
            self.options.append(PromptOption.YES_TO_ALL)
        self.default = default if default in self.options else PromptOption.YES
        self.state = SessionState.PRESENT

    def run(self) -> SessionResult:
        accept_all = False
        while True:
            if self.state is SessionState.PRESENT:
                self.present()
                choice = select(self.prompt_io, ACCEPT_PROMPT, self.options, self.default)
                self.state = self._transition(choice)
                accept_all = choice is PromptOption.YES_TO_ALL
            elif self.state is SessionState.EDIT:
                self.edit()
                self.state = SessionState.PRESENT
            else:
                logger.debug("Session finished in state %s", self.state.value)
                return SessionResult(self.state, self.proposal, accept_all=accept_all)

    def present(self) -> None:
        self.proposal.update(self.title_template, self.filename_template)
        self.prompt_io.print("Proposed changes:")
        for line in self.diff_lines():
            self.prompt_io.print(line)

    def diff_lines(self) -> List[str]:
        lines = [format_change(FILENAME, self.current_filename, self.proposed_filename())]
        lines.append("Tags:")
        old_values = self.existing.tag_values()
        new_values = self.proposal.tag_values()
        for name in DIFF_ORDER:
            lines.append(format_change(name, old_values.get(name), new_values.get(name)))
        return lines

    def proposed_filename(self) -> Optional[str]:
        if not self.proposal.filename:
            return None
        return f"{self.proposal.filename}{self.suffix}"

    def edit(self) -> None:
        edits = edit_tags(self.prompt_io)
        for message in self.proposal.apply_edits(edits):
            self.prompt_io.print(message)

    @staticmethod
    def _transition(choice: PromptOption) -> SessionState:
        if choice in (PromptOption.YES, PromptOption.YES_TO_ALL):
            return SessionState.ACCEPT
        if choice is PromptOption.EDIT:
            return SessionState.EDIT
        return SessionState.REJECT
