"""Building and querying the training session."""

from pathlib import Path
from typing import Optional

from forces.domain.exceptions import SessionError, TemplateError
from forces.domain.models import (
    Contest,
    ProblemState,
    Session,
    SubmitVerdict,
    Template,
    TemplateRegistry,
    TestVerdict,
)
from forces.services.workspace import solution_path


def build_session(contest_dir: Path, contest: Contest, template: Template) -> Session:
    """Fresh session for a just-scraped contest: nothing passed, nothing submitted."""
    return Session(
        working_directory=contest_dir.resolve(),
        problems=[
            ProblemState(
                problem_id=problem.id,
                template_name=template.name,
                test_verdict=TestVerdict(passed=0, total=len(problem.tests)),
                submit_verdict=SubmitVerdict(),
            )
            for problem in contest.problems
        ],
    )


def template_for(registry: TemplateRegistry, state: ProblemState) -> Template:
    template = registry.get_template(state.template_name)
    if template is None:
        raise TemplateError(
            f"Template '{state.template_name}' used by problem {state.problem_id} "
            "is no longer registered"
        )
    return template


def resolve_problem(
    session: Session,
    registry: TemplateRegistry,
    problem_id: Optional[str] = None,
) -> ProblemState:
    """
    Pick the problem a command operates on.

    An explicit id must be in the session. Without one, the problem whose
    solution file was modified most recently is used.
    """
    if problem_id is not None:
        state = session.find_problem(problem_id)
        if state is None:
            known = ", ".join(s.problem_id for s in session.problems) or "none"
            raise SessionError(f"Problem {problem_id} is not in the session (known: {known})")
        return state

    return session.most_recently_touched(
        lambda state: solution_path(
            session.working_directory, state.problem_id, template_for(registry, state)
        )
    )
