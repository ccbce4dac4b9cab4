"""Service for assembling contests from their pages."""

import asyncio
from typing import Sequence

from loguru import logger

from forces.domain.models import Contest, ContestIdentifier, Problem
from forces.infrastructure.parsers import ContestPageParser, ProblemPageParser


class ContestService:
    """Builds an in-memory Contest from the contest listing and problem pages."""

    def __init__(
        self,
        *,
        contest_parser: ContestPageParser,
        problem_parser: ProblemPageParser,
    ):
        """Initialize service with dependencies."""
        self.contest_parser = contest_parser
        self.problem_parser = problem_parser

    async def assemble(
        self,
        contest_id: str | ContestIdentifier,
        problem_ids: Sequence[str] = (),
    ) -> Contest:
        """
        Scrape a contest into memory.

        Args:
            contest_id: Contest id or identifier
            problem_ids: Problems to scrape. When empty the contest page is
                fetched to discover them; otherwise it is not fetched at all.

        Returns:
            Contest whose problems follow the order of problem_ids

        Raises:
            InvalidIdentifierError: If a problem id cannot name a file
            ParsingError: If any page does not have the expected structure
            FetchError: If any page cannot be fetched
        """
        identifier = (
            contest_id
            if isinstance(contest_id, ContestIdentifier)
            else ContestIdentifier(contest_id=contest_id)
        )
        logger.debug(f"Assembling contest {identifier}")

        if problem_ids:
            ids = list(dict.fromkeys(problem_ids))
            logger.debug(f"Using explicit problem ids: {', '.join(ids)}")
        else:
            ids = await self.contest_parser.parse_problem_ids(identifier)

        # Build every identifier first so a bad id fails before any fetch starts
        targets = [identifier.problem(problem_id) for problem_id in ids]

        # gather keeps input order and raises the first failure
        problems: list[Problem] = await asyncio.gather(
            *(self.problem_parser.parse_problem(target) for target in targets)
        )

        contest = Contest(
            id=identifier.contest_id,
            problems=list(problems),
            is_gym=identifier.is_gym,
        )
        logger.info(f"Assembled contest {identifier} with {len(contest.problems)} problems")
        return contest
