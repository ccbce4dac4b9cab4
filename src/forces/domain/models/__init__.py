"""Domain models package."""

from .contest import Contest, Problem, Test
from .identifiers import ContestIdentifier, ProblemIdentifier
from .session import (
    ProblemState,
    Session,
    SubmitVerdict,
    SubmitVerdictLabel,
    TestVerdict,
)
from .template import DEFAULT_TEMPLATE_NAME, Template, TemplateRegistry

__all__ = [
    "Contest",
    "ContestIdentifier",
    "DEFAULT_TEMPLATE_NAME",
    "Problem",
    "ProblemIdentifier",
    "ProblemState",
    "Session",
    "SubmitVerdict",
    "SubmitVerdictLabel",
    "Template",
    "TemplateRegistry",
    "Test",
    "TestVerdict",
]
