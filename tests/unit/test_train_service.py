"""End-to-end tests for scraping a contest into a session."""

import pytest

from forces.domain.exceptions import MalformedPageError, TemplateError
from forces.infrastructure.parsers import ContestPageParser, ProblemPageParser
from forces.infrastructure.storage import load_session, save_session
from forces.domain.models import Session
from forces.services.contest import ContestService
from forces.services.train import TrainService
from forces.services.workspace import WorkspaceWriter

BASE = "https://codeforces.com/contest/1720"


@pytest.fixture
def make_service(tmp_path, make_fetcher):
    def factory(pages):
        fetcher = make_fetcher(pages)
        service = TrainService(
            contest_service=ContestService(
                contest_parser=ContestPageParser(fetcher),
                problem_parser=ProblemPageParser(fetcher),
            ),
            writer=WorkspaceWriter(),
            config_dir=tmp_path / "config",
        )
        return service, fetcher

    return factory


@pytest.mark.asyncio
async def test_train_writes_tests_solutions_and_session(tmp_path, make_service, contest_page, problem_page):
    service, _ = make_service(
        {
            BASE: contest_page(["A", "B"]),
            f"{BASE}/problem/A": problem_page("A. Sum", [("1 2", "3")]),
            f"{BASE}/problem/B": problem_page("B. Product", [("2 3", "6")]),
        }
    )
    work = tmp_path / "work"

    session = await service.train("1720", [], base_dir=work)

    contest_dir = work / "1720"
    for problem_id in ("A", "B"):
        assert (contest_dir / "tests" / problem_id / "in0.txt").is_file()
        assert (contest_dir / "tests" / problem_id / "out0.txt").is_file()
        assert (contest_dir / f"{problem_id}.cpp").is_file()
    assert (contest_dir / "tests" / "B" / "out0.txt").read_text() == "6"

    assert [s.problem_id for s in session.problems] == ["A", "B"]
    assert all(s.test_verdict.total == 1 for s in session.problems)
    assert load_session(tmp_path / "config") == session


@pytest.mark.asyncio
async def test_train_with_explicit_ids_skips_listing(tmp_path, make_service, problem_page):
    service, fetcher = make_service({f"{BASE}/problem/C": problem_page("C. Z", [("1", "1")])})

    session = await service.train("1720", ["C"], base_dir=tmp_path)

    assert fetcher.requested == [f"{BASE}/problem/C"]
    assert [s.problem_id for s in session.problems] == ["C"]


@pytest.mark.asyncio
async def test_failed_scrape_keeps_previous_session(tmp_path, make_service, contest_page, problem_page, sample_block):
    broken = '<div class="title">B. Broken</div><div class="sample-test">' + sample_block("input", "1") + "</div>"
    service, _ = make_service(
        {
            BASE: contest_page(["A", "B"]),
            f"{BASE}/problem/A": problem_page("A. Sum", [("1 2", "3")]),
            f"{BASE}/problem/B": broken,
        }
    )
    previous = Session(working_directory=tmp_path / "old", problems=[])
    save_session(tmp_path / "config", previous)

    with pytest.raises(MalformedPageError):
        await service.train("1720", [], base_dir=tmp_path / "work")

    assert load_session(tmp_path / "config") == previous
    assert not (tmp_path / "work").exists()


@pytest.mark.asyncio
async def test_train_with_unknown_template(tmp_path, make_service):
    service, fetcher = make_service({})

    with pytest.raises(TemplateError):
        await service.train("1720", ["A"], base_dir=tmp_path, template_name="rust")

    assert fetcher.requested == []
