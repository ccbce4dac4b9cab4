"""Contest and problem ids as they appear in Codeforces URLs and on disk."""

import re
from dataclasses import dataclass

from forces.domain.exceptions import InvalidIdentifierError

# Problem ids name files and directories, so path separators and dot-names are out
PROBLEM_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")


@dataclass(frozen=True)
class ContestIdentifier:
    """A regular contest or a gym contest."""

    contest_id: str
    is_gym: bool = False

    @property
    def section(self) -> str:
        """URL section the contest lives under."""
        return "gym" if self.is_gym else "contest"

    def problem(self, problem_id: str) -> "ProblemIdentifier":
        return ProblemIdentifier(
            contest_id=self.contest_id,
            problem_id=problem_id,
            is_gym=self.is_gym,
        )

    def __str__(self) -> str:
        return f"{self.section}/{self.contest_id}"


@dataclass(frozen=True)
class ProblemIdentifier:
    """A problem inside a contest, e.g. 1720/D1."""

    contest_id: str
    problem_id: str
    is_gym: bool = False

    def __post_init__(self) -> None:
        if not PROBLEM_ID_PATTERN.fullmatch(self.problem_id):
            raise InvalidIdentifierError(f"Invalid problem id: {self.problem_id!r}")

    @property
    def contest(self) -> ContestIdentifier:
        return ContestIdentifier(contest_id=self.contest_id, is_gym=self.is_gym)

    def __str__(self) -> str:
        return f"{self.contest}/{self.problem_id}"
