"""Coordinates scraping a contest into a fresh training session."""

from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from forces.domain.exceptions import TemplateError
from forces.domain.models import ContestIdentifier, Session
from forces.infrastructure.storage import load_or_init_template_registry, save_session
from forces.services.contest import ContestService
from forces.services.session import build_session
from forces.services.workspace import WorkspaceWriter


class TrainService:
    """Scrape, write the workspace, then replace the stored session."""

    def __init__(
        self,
        *,
        contest_service: ContestService,
        writer: WorkspaceWriter,
        config_dir: Path,
    ):
        self.contest_service = contest_service
        self.writer = writer
        self.config_dir = config_dir

    async def train(
        self,
        contest: str | ContestIdentifier,
        problem_ids: Sequence[str] = (),
        *,
        base_dir: Path,
        template_name: Optional[str] = None,
        overwrite: bool = False,
    ) -> Session:
        """
        Scrape a contest into {base_dir}/{contest_id} and start a new session.

        The contest is scraped completely before anything is written, and the
        session file is only replaced once every test and solution is on disk.
        """
        registry = load_or_init_template_registry(self.config_dir)
        template = (
            registry.get_template(template_name) if template_name else registry.get_starter()
        )
        if template is None:
            raise TemplateError(f"Template '{template_name or registry.starter_name}' does not exist")

        logger.info(f"Step 1: Scraping contest {contest}")
        scraped = await self.contest_service.assemble(contest, problem_ids)

        contest_dir = base_dir / scraped.id
        logger.info(f"Step 2: Writing workspace {contest_dir}")
        for problem in scraped.problems:
            self.writer.write_tests(contest_dir, problem)
            self.writer.write_solution(contest_dir, template, scraped, problem, overwrite=overwrite)

        logger.info("Step 3: Saving session")
        session = build_session(contest_dir, scraped, template)
        save_session(self.config_dir, session)

        logger.info(
            f"Ready to train contest {scraped.id}: {len(scraped.problems)} problems in {contest_dir}"
        )
        return session
