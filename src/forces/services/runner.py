"""Runs a solution against its sample tests."""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from forces.domain.exceptions import WorkspaceError
from forces.domain.models import ProblemState, Session, Template, TestVerdict
from forces.services.workspace import input_path, output_path, solution_path, tests_dir


@dataclass
class TestResult:
    """Outcome of a single sample test."""

    __test__ = False

    index: int
    passed: bool
    expected: str
    actual: str
    error: str = ""


@dataclass
class TestReport:
    """All sample test outcomes for one problem."""

    __test__ = False

    problem_id: str
    results: list[TestResult] = field(default_factory=list)

    @property
    def verdict(self) -> TestVerdict:
        return TestVerdict(
            passed=sum(1 for result in self.results if result.passed),
            total=len(self.results),
        )


def normalize_output(text: str) -> str:
    """Ignore trailing whitespace on each line and blank lines at either end."""
    lines = [line.rstrip() for line in text.replace("\r\n", "\n").split("\n")]
    return "\n".join(lines).strip("\n")


def build_command(template: Template, source: Path) -> str:
    return template.run_command.format(source=source.name, problem=source.stem)


class SolutionRunner:
    """Executes a template's run command once per sample test."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def _run_one(self, command: str, cwd: Path, index: int, stdin: str, expected: str) -> TestResult:
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                input=stdin,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Test {index} timed out after {self.timeout}s")
            return TestResult(index, False, expected, "", error=f"timed out after {self.timeout}s")

        if completed.returncode != 0:
            return TestResult(
                index,
                False,
                expected,
                completed.stdout,
                error=f"exit code {completed.returncode}: {completed.stderr.strip()}",
            )

        passed = normalize_output(completed.stdout) == normalize_output(expected)
        return TestResult(index, passed, expected, completed.stdout)

    def run_tests(self, session: Session, state: ProblemState, template: Template) -> TestReport:
        """
        Run the problem's solution against every in{N}.txt / out{N}.txt pair.

        Raises:
            WorkspaceError: If the solution or its tests are missing
        """
        workdir = session.working_directory
        source = solution_path(workdir, state.problem_id, template)
        if not source.is_file():
            raise WorkspaceError(f"Solution {source} does not exist")

        directory = tests_dir(workdir, state.problem_id)
        if not directory.is_dir():
            raise WorkspaceError(f"Test directory {directory} does not exist")

        command = build_command(template, source)
        logger.debug(f"Running '{command}' in {workdir}")

        report = TestReport(problem_id=state.problem_id)
        index = 0
        while input_path(directory, index).is_file():
            try:
                stdin = input_path(directory, index).read_text(encoding="utf-8")
                expected = output_path(directory, index).read_text(encoding="utf-8")
            except OSError as e:
                raise WorkspaceError(f"Cannot read test {index} in {directory}: {e}") from e

            report.results.append(self._run_one(command, workdir, index, stdin, expected))
            index += 1

        if index != state.test_verdict.total:
            logger.warning(
                f"Found {index} tests for {state.problem_id}, "
                f"session expects {state.test_verdict.total}"
            )

        logger.info(f"Problem {state.problem_id}: {report.verdict} tests passed")
        return report
