"""Transient scrape results: contests, problems and their sample tests."""

from dataclasses import dataclass, field

from forces.domain.models.identifiers import ContestIdentifier


@dataclass(frozen=True)
class Test:
    """One sample input/output pair."""

    # Not a pytest test class
    __test__ = False

    input: str
    output: str


@dataclass
class Problem:
    """A problem scraped from its page."""

    id: str
    name: str
    tests: list[Test] = field(default_factory=list)


@dataclass
class Contest:
    """Problems scraped under one contest id, in scrape order."""

    id: str
    problems: list[Problem] = field(default_factory=list)
    is_gym: bool = False

    @property
    def identifier(self) -> ContestIdentifier:
        return ContestIdentifier(contest_id=self.id, is_gym=self.is_gym)
