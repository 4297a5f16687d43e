from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import PersistFailurePolicy, TaggingSettings
from .fs_utils import fit_filename, rename_no_clobber
from .models import ExistingTags, PersistError
from .prompt_io import ConsolePromptIO, PromptIO
from .prompting import PromptOption
from .proposal import TagProposal
from .session import ProposalSession
from .tagging import TagStore, TagWriter
from .title_parser import parse_title

logger = logging.getLogger(__name__)


class OutcomeStatus(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    SKIPPED = "skipped"


@dataclass(slots=True)
class FileOutcome:
    path: Path
    status: OutcomeStatus
    target: Optional[Path] = None
    reason: Optional[str] = None


@dataclass(slots=True)
class TagRunReport:
    accepted: List[Path] = field(default_factory=list)
    rejected: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failures: List[Tuple[Path, str]] = field(default_factory=list)
    aborted: bool = False

    def record(self, outcome: FileOutcome) -> None:
        if outcome.status is OutcomeStatus.ACCEPTED:
            self.accepted.append(outcome.target or outcome.path)
        elif outcome.status is OutcomeStatus.REJECTED:
            self.rejected.append(outcome.path)
        else:
            self.skipped.append(outcome.path)

    def summary(self) -> str:
        return (
            f"{len(self.accepted)} tagged, {len(self.rejected)} rejected, "
            f"{len(self.skipped)} skipped, {len(self.failures)} failed"
        )


def collect_audio_files(directory: Path, extensions: Sequence[str]) -> List[Path]:
    exts = {ext.lower() for ext in extensions}
    try:
        candidates = [p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in exts]
    except OSError as exc:
        logger.warning("Cannot list %s: %s", directory, exc)
        return []
    return sorted(candidates, key=lambda p: p.name.lower())


_DECISIONS = {
    "yes": PromptOption.YES,
    "no": PromptOption.NO,
    "edit": PromptOption.EDIT,
}


class TitleTagger:
    """Tag files one at a time from their title tag, asking for confirmation per file."""

    def __init__(
        self,
        settings: TaggingSettings,
        *,
        tag_store: Optional[TagStore] = None,
        prompt_io: Optional[PromptIO] = None,
    ) -> None:
        self.settings = settings
        self.tag_store: TagStore = tag_store or TagWriter()
        self.prompt_io: PromptIO = prompt_io or ConsolePromptIO()
        self.accept_all = settings.auto_accept
        self.report = TagRunReport()

    def run(self, paths: Iterable[Path]) -> TagRunReport:
        exts = {ext.lower() for ext in self.settings.include_extensions}
        candidates = sorted(
            (p for p in paths if p.suffix.lower() in exts), key=lambda p: p.name.lower()
        )
        total = len(candidates)
        for idx, path in enumerate(candidates, 1):
            self.prompt_io.print(f"\nTagging {idx} of {total}: {path.name}")
            try:
                outcome = self.process_file(path)
            except PersistError as exc:
                if self.settings.persist_failure_policy is PersistFailurePolicy.ABORT:
                    self.report.aborted = True
                    logger.error("Stopping: could not persist %s: %s", path, exc)
                    raise
                logger.warning("Could not persist %s: %s", path, exc)
                self.report.failures.append((path, str(exc)))
                continue
            if outcome.reason:
                logger.info("Skipping %s: %s", path.name, outcome.reason)
            self.report.record(outcome)
        return self.report

    def process_file(self, path: Path) -> FileOutcome:
        existing = self.tag_store.read(path)
        if existing is None:
            return FileOutcome(path, OutcomeStatus.SKIPPED, reason="tags could not be read")
        proposal = self.build_proposal(existing)
        if proposal is None:
            return FileOutcome(path, OutcomeStatus.SKIPPED, reason="no title tag")

        if self.accept_all:
            proposal.update(self.settings.title_template, self.settings.filename_template)
        else:
            session = ProposalSession(
                proposal,
                prompt_io=self.prompt_io,
                existing=existing,
                current_filename=path.name,
                suffix=path.suffix,
                title_template=self.settings.title_template,
                filename_template=self.settings.filename_template,
                default=_DECISIONS[self.settings.default_decision.value],
                allow_accept_all=True,
            )
            result = session.run()
            if result.accept_all:
                self.accept_all = True
            if not result.accepted:
                return FileOutcome(path, OutcomeStatus.REJECTED)

        target = self.persist(path, proposal)
        return FileOutcome(path, OutcomeStatus.ACCEPTED, target=target)

    def build_proposal(self, existing: ExistingTags) -> Optional[TagProposal]:
        seed = TagProposal()
        if self.settings.keep_existing_artist and existing.artist:
            seed.feature([existing.artist])
        return parse_title(existing.title, seed)

    def persist(self, path: Path, proposal: TagProposal) -> Path:
        self.tag_store.write(path, proposal)
        return self.rename(path, proposal)

    def rename(self, path: Path, proposal: TagProposal) -> Path:
        # Nothing extracted: keep the current name.
        if not proposal.filename or (proposal.artist is None and proposal.title is None):
            return path
        target = fit_filename(
            path.with_name(f"{proposal.filename}{path.suffix}"),
            self.settings.max_filename_length,
        )
        if target == path:
            return path
        try:
            rename_no_clobber(path, target)
        except OSError as exc:
            raise PersistError(f"Cannot rename {path.name} -> {target.name}: {exc}") from exc
        logger.info("Renamed %s -> %s", path.name, target.name)
        return target
