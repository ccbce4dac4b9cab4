"""Materializes scraped problems as test files and solution stubs."""

import os
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from forces.domain.exceptions import TemplateSourceError, WorkspaceError
from forces.domain.models import Contest, Problem, Template
from forces.infrastructure.parsers import URLParser

FILE_MODE = 0o644

COMMENT_PREFIXES = {
    ".py": "#",
    ".rb": "#",
    ".sh": "#",
    ".hs": "--",
    ".lua": "--",
}
DEFAULT_COMMENT_PREFIX = "//"

TEST_FILE_PATTERN = re.compile(r"^(?:in|out)(\d+)\.txt$")


def tests_dir(contest_dir: Path, problem_id: str) -> Path:
    return contest_dir / "tests" / problem_id


def input_path(problem_tests_dir: Path, index: int) -> Path:
    return problem_tests_dir / f"in{index}.txt"


def output_path(problem_tests_dir: Path, index: int) -> Path:
    return problem_tests_dir / f"out{index}.txt"


def solution_path(contest_dir: Path, problem_id: str, template: Template) -> Path:
    return contest_dir / f"{problem_id}{template.file_extension}"


def _write_file(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
        os.chmod(path, FILE_MODE)
    except OSError as e:
        raise WorkspaceError(f"Failed to write {path}: {e}") from e


def _remove_stale_tests(directory: Path, count: int) -> None:
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise WorkspaceError(f"Failed to list {directory}: {e}") from e

    for path in entries:
        match = TEST_FILE_PATTERN.match(path.name)
        if match is None or int(match.group(1)) < count:
            continue
        try:
            path.unlink()
        except OSError as e:
            raise WorkspaceError(f"Failed to remove stale test {path}: {e}") from e
        logger.debug(f"Removed stale test {path}")


class WorkspaceWriter:
    """Writes sample tests and generated solutions into a contest directory."""

    def __init__(
        self,
        url_parser: type[URLParser] = URLParser,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            url_parser: Builds the canonical problem URL for solution headers
            clock: Source of the generation timestamp
        """
        self.url_parser = url_parser
        self.clock = clock

    def write_tests(self, contest_dir: Path, problem: Problem) -> Path:
        """
        Write a problem's sample tests as in{N}.txt / out{N}.txt.

        Existing files with the same names are overwritten, and test files
        numbered past the new sample count are removed.

        Returns:
            The problem's test directory
        """
        directory = tests_dir(contest_dir, problem.id)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"Failed to create {directory}: {e}") from e

        for index, test in enumerate(problem.tests):
            _write_file(input_path(directory, index), test.input.encode("utf-8"))
            _write_file(output_path(directory, index), test.output.encode("utf-8"))

        _remove_stale_tests(directory, len(problem.tests))

        logger.debug(f"Wrote {len(problem.tests)} tests to {directory}")
        return directory

    def generate_solution(self, template: Template, contest: Contest, problem: Problem) -> bytes:
        """Return the template source prefixed with a header describing the problem."""
        source = Path(template.source_path).expanduser()
        try:
            body = source.read_bytes()
        except OSError as e:
            raise TemplateSourceError(
                f"Cannot read source of template '{template.name}' at {source}: {e}"
            ) from e

        prefix = COMMENT_PREFIXES.get(template.file_extension, DEFAULT_COMMENT_PREFIX)
        url = self.url_parser.build_problem_url(contest.identifier.problem(problem.id))
        header_lines = [
            f"Contest: {contest.id}",
            f"Problem: {problem.name}",
            f"URL: {url}",
            f"Generated: {self.clock().strftime('%Y-%m-%d %H:%M:%S')}",
        ]
        header = "".join(f"{prefix} {line}\n" for line in header_lines) + "\n"
        return header.encode("utf-8") + body

    def write_solution(
        self,
        contest_dir: Path,
        template: Template,
        contest: Contest,
        problem: Problem,
        overwrite: bool = False,
    ) -> Optional[Path]:
        """
        Generate and write {contest_dir}/{problem_id}{ext}.

        An existing solution is left untouched unless overwrite is set.

        Returns:
            The written path, or None if an existing file was kept
        """
        path = solution_path(contest_dir, problem.id, template)
        if path.exists() and not overwrite:
            logger.warning(f"Keeping existing solution {path} (use --force to regenerate)")
            return None

        _write_file(path, self.generate_solution(template, contest, problem))
        logger.debug(f"Wrote solution {path}")
        return path
