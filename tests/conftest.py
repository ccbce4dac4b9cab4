"""Shared fixtures: synthetic Codeforces pages and an in-memory page fetcher."""

import pytest

from forces.domain.exceptions import FetchError
from forces.infrastructure.tree import SoupNode


def render_contest_page(problem_ids):
    rows = "".join(
        f"""
        <tr>
          <td class="id"><a href="/contest/1720/problem/{pid}">
            {pid}
          </a></td>
          <td><div><a href="/contest/1720/problem/{pid}">Problem {pid}</a></div></td>
        </tr>"""
        for pid in problem_ids
    )
    return f"""
    <html><body>
      <div class="datatable">
        <table class="problems">
          <tr><th>#</th><th>Name</th></tr>
          {rows}
        </table>
      </div>
    </body></html>
    """


def render_sample_block(kind, text):
    caption = "Input" if kind == "input" else "Output"
    return f'<div class="{kind}"><div class="title">{caption}</div><pre>{text}</pre></div>'


def render_problem_page(name, tests):
    pairs = "\n".join(
        render_sample_block("input", test_in) + "\n" + render_sample_block("output", test_out)
        for test_in, test_out in tests
    )
    return f"""
    <html><head><title>Problem - Codeforces</title></head><body>
      <div class="problem-statement">
        <div class="header">
          <div class="title">{name}</div>
          <div class="time-limit"><div class="property-title">time limit per test</div>1 second</div>
        </div>
        <div><p>Statement text.</p></div>
        <div class="sample-tests">
          <div class="section-title">Examples</div>
          <div class="sample-test">
            {pairs}
          </div>
        </div>
      </div>
    </body></html>
    """


class FakeFetcher:
    """Serves canned HTML by URL and records which URLs were requested."""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    async def fetch_tree(self, url):
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404")
        return SoupNode.from_html(self.pages[url])


@pytest.fixture
def contest_page():
    return render_contest_page


@pytest.fixture
def problem_page():
    return render_problem_page


@pytest.fixture
def sample_block():
    return render_sample_block


@pytest.fixture
def make_fetcher():
    return FakeFetcher
