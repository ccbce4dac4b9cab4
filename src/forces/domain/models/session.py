"""Persisted training session: working directory and per-problem verdicts."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from forces.domain.exceptions import SessionError, WorkspaceError


class SubmitVerdictLabel(str, Enum):
    """Outcome of a judge submission."""

    NOT_ATTEMPTED = "not_attempted"
    MEMORY_LIMIT_EXCEEDED = "memory_limit_exceeded"
    TIME_LIMIT_EXCEEDED = "time_limit_exceeded"
    RUNTIME_ERROR = "runtime_error"
    WRONG_ANSWER = "wrong_answer"
    IDLENESS_LIMIT_EXCEEDED = "idleness_limit_exceeded"
    JUDGEMENT_FAILED = "judgement_failed"
    ACCEPTED = "accepted"

    @property
    def display(self) -> str:
        return _LABEL_DISPLAY[self]


_LABEL_DISPLAY: dict[SubmitVerdictLabel, str] = {
    SubmitVerdictLabel.NOT_ATTEMPTED: "-",
    SubmitVerdictLabel.MEMORY_LIMIT_EXCEEDED: "MLE",
    SubmitVerdictLabel.TIME_LIMIT_EXCEEDED: "TLE",
    SubmitVerdictLabel.RUNTIME_ERROR: "RE",
    SubmitVerdictLabel.WRONG_ANSWER: "WA",
    SubmitVerdictLabel.IDLENESS_LIMIT_EXCEEDED: "ILE",
    SubmitVerdictLabel.JUDGEMENT_FAILED: "JF",
    SubmitVerdictLabel.ACCEPTED: "AC",
}

class TestVerdict(BaseModel):
    """Local sample test result: passed out of total."""

    __test__ = False

    passed: int = Field(default=0, ge=0)
    total: int = Field(ge=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_bounds(self) -> TestVerdict:
        if self.passed > self.total:
            raise ValueError(f"passed ({self.passed}) exceeds total ({self.total})")
        return self

    def __str__(self) -> str:
        return f"{self.passed}/{self.total}"


class SubmitVerdict(BaseModel):
    """Judge verdict for a problem."""

    label: SubmitVerdictLabel = SubmitVerdictLabel.NOT_ATTEMPTED
    message: str = ""

    model_config = ConfigDict(extra="forbid")


class ProblemState(BaseModel):
    """Progress for one problem of the session."""

    problem_id: str
    template_name: str
    test_verdict: TestVerdict
    submit_verdict: SubmitVerdict = Field(default_factory=SubmitVerdict)

    model_config = ConfigDict(extra="forbid")


class Session(BaseModel):
    """The current contest workspace and its problem states."""

    working_directory: Path
    problems: list[ProblemState] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def find_problem(self, problem_id: str) -> ProblemState | None:
        for state in self.problems:
            if state.problem_id == problem_id:
                return state
        return None

    def problem_dir(self, state: ProblemState) -> Path:
        """Directory holding the sample tests of a problem."""
        return self.working_directory / "tests" / state.problem_id

    def most_recently_touched(
        self, path_of: Callable[[ProblemState], Path] | None = None
    ) -> ProblemState:
        """
        Return the problem whose on-disk path was modified last.

        Args:
            path_of: Maps a state to the path to stat. Defaults to the
                problem's test directory.

        Raises:
            SessionError: If the session has no problems
            WorkspaceError: If any listed problem's path cannot be stat'ed
        """
        if not self.problems:
            raise SessionError("Session has no problems")

        path_of = path_of or self.problem_dir

        def mtime(state: ProblemState) -> float:
            path = path_of(state)
            try:
                return os.stat(path).st_mtime
            except OSError as e:
                raise WorkspaceError(
                    f"Cannot stat {path} for problem {state.problem_id}: {e}"
                ) from e

        # max keeps the first of equally recent problems
        return max(self.problems, key=mtime)
