"""Command handlers for the forces CLI."""

import argparse
import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from loguru import logger

from forces.config import Settings
from forces.domain.models import Session, SubmitVerdictLabel
from forces.infrastructure.http_client import AsyncHTTPClient
from forces.infrastructure.parsers import URLParser
from forces.infrastructure.storage import load_or_init_template_registry, load_session
from forces.services import SolutionRunner, TemplateService, create_train_service
from forces.services.session import resolve_problem, template_for
from forces.services.workspace import solution_path

Handler = Callable[[argparse.Namespace, Settings], int]


@dataclass(frozen=True)
class Command:
    """A CLI subcommand: how to declare its arguments and how to run it."""

    name: str
    help: str
    configure: Callable[[argparse.ArgumentParser], None]
    handler: Handler


# train


def _configure_train(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("contest", help="Contest id or contest URL")
    parser.add_argument("problems", nargs="*", help="Problem ids (default: all problems)")
    parser.add_argument(
        "--dir",
        type=Path,
        default=Path.cwd(),
        help="Directory in which the contest directory is created",
    )
    parser.add_argument("--template", help="Template name (default: starter template)")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Regenerate solution files that already exist",
    )


async def _train(args: argparse.Namespace, settings: Settings) -> Session:
    identifier = URLParser.parse_contest_url(args.contest)
    async with AsyncHTTPClient(timeout=settings.http_timeout) as http_client:
        service = create_train_service(http_client, settings)
        return await service.train(
            identifier,
            args.problems,
            base_dir=args.dir,
            template_name=args.template,
            overwrite=args.force,
        )


def handle_train(args: argparse.Namespace, settings: Settings) -> int:
    session = asyncio.run(_train(args, settings))
    print(f"Contest directory: {session.working_directory}")
    for state in session.problems:
        print(f"  {state.problem_id}: {state.test_verdict.total} sample tests")
    return 0


# test


def _configure_problem(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "problem",
        nargs="?",
        help="Problem id (default: most recently edited solution)",
    )


def handle_test(args: argparse.Namespace, settings: Settings) -> int:
    session = load_session(settings.config_dir)
    registry = load_or_init_template_registry(settings.config_dir)
    state = resolve_problem(session, registry, args.problem)
    template = template_for(registry, state)

    report = SolutionRunner(timeout=settings.run_timeout).run_tests(session, state, template)
    for result in report.results:
        status = "PASS" if result.passed else "FAIL"
        print(f"Test {result.index}: {status}")
        if not result.passed:
            if result.error:
                print(f"  error: {result.error}")
            print("  expected:")
            print(_indent(result.expected))
            print("  actual:")
            print(_indent(result.actual))

    verdict = report.verdict
    print(f"{state.problem_id}: {verdict} passed")
    return 0 if verdict.passed == verdict.total else 1


def _indent(text: str) -> str:
    return "\n".join(f"    {line}" for line in text.rstrip("\n").split("\n"))


# status


_REJECTED_LABELS = frozenset(
    {
        SubmitVerdictLabel.MEMORY_LIMIT_EXCEEDED,
        SubmitVerdictLabel.TIME_LIMIT_EXCEEDED,
        SubmitVerdictLabel.RUNTIME_ERROR,
        SubmitVerdictLabel.WRONG_ANSWER,
        SubmitVerdictLabel.IDLENESS_LIMIT_EXCEEDED,
        SubmitVerdictLabel.JUDGEMENT_FAILED,
    }
)


def describe_submission(label: SubmitVerdictLabel) -> str:
    if label is SubmitVerdictLabel.NOT_ATTEMPTED:
        return "not submitted"
    if label is SubmitVerdictLabel.ACCEPTED:
        return "accepted"
    if label in _REJECTED_LABELS:
        return f"rejected ({label.display})"
    raise AssertionError(f"Unhandled submit verdict: {label!r}")


def handle_status(args: argparse.Namespace, settings: Settings) -> int:
    session = load_session(settings.config_dir)
    print(f"Working directory: {session.working_directory}")
    print(f"{'Problem':<10}{'Template':<12}{'Tests':<8}Submission")
    for state in session.problems:
        submission = describe_submission(state.submit_verdict.label)
        if state.submit_verdict.message:
            submission = f"{submission}: {state.submit_verdict.message}"
        print(
            f"{state.problem_id:<10}{state.template_name:<12}"
            f"{str(state.test_verdict):<8}{submission}"
        )
    return 0


# cd / code


def handle_cd(args: argparse.Namespace, settings: Settings) -> int:
    session = load_session(settings.config_dir)
    print(session.working_directory)
    return 0


def handle_code(args: argparse.Namespace, settings: Settings) -> int:
    session = load_session(settings.config_dir)
    registry = load_or_init_template_registry(settings.config_dir)
    state = resolve_problem(session, registry, args.problem)
    print(solution_path(session.working_directory, state.problem_id, template_for(registry, state)))
    return 0


# template


def _configure_template(parser: argparse.ArgumentParser) -> None:
    actions = parser.add_subparsers(dest="action", required=True)

    actions.add_parser("list", help="List registered templates")

    add = actions.add_parser("add", help="Register a template")
    add.add_argument("name")
    add.add_argument("source", type=Path, help="Template source file")
    add.add_argument("extension", help="Solution file extension, e.g. .py")
    add.add_argument(
        "run_command",
        help="Shell command run per test; {source} and {problem} are substituted",
    )

    remove = actions.add_parser("remove", help="Unregister a template")
    remove.add_argument("name")

    starter = actions.add_parser("starter", help="Set the template used for new solutions")
    starter.add_argument("name")


def handle_template(args: argparse.Namespace, settings: Settings) -> int:
    service = TemplateService(settings.config_dir)

    if args.action == "list":
        registry = service.load()
        for template in registry.templates:
            marker = "*" if template.name == registry.starter_name else " "
            print(
                f"{marker} {template.name:<12}{template.file_extension:<6}"
                f"{template.source_path}  [{template.run_command}]"
            )
    elif args.action == "add":
        service.add_template(args.name, args.source, args.extension, args.run_command)
    elif args.action == "remove":
        service.remove_template(args.name)
    elif args.action == "starter":
        service.set_starter(args.name)
    else:
        logger.error(f"Unknown template action: {args.action}")
        return 2
    return 0


def build_command_table() -> dict[str, Command]:
    """All CLI subcommands, keyed by name."""
    commands = [
        Command("train", "Scrape a contest and start a new session", _configure_train, handle_train),
        Command("test", "Run a solution against its sample tests", _configure_problem, handle_test),
        Command("status", "Show progress of the current session", lambda parser: None, handle_status),
        Command("cd", "Print the session working directory", lambda parser: None, handle_cd),
        Command("code", "Print the path of a solution file", _configure_problem, handle_code),
        Command("template", "Manage solution templates", _configure_template, handle_template),
    ]
    return {command.name: command for command in commands}
