"""Parser for extracting the problem list from contest pages."""

from loguru import logger

from forces.domain.exceptions import ElementNotFoundError, MalformedPageError
from forces.domain.models import ContestIdentifier
from forces.infrastructure.tree import (
    Node,
    collect_text,
    element_children,
    find_first,
    has_class,
    is_element,
)

from .interfaces import PageFetcherProtocol, ParsingError
from .url_parser import URLParser


def extract_problem_ids(root: Node) -> list[str]:
    """
    Extract problem ids from a contest page tree.

    Expected markup (header row first, one row per problem after it):

        <table class="problems">
          <tbody>
            <tr><th>#</th><th>Name</th>...</tr>
            <tr><td class="id"><a href="...">A</a></td>...</tr>
            ...
          </tbody>
        </table>

    Raises:
        ElementNotFoundError: If the problems table is missing
        MalformedPageError: If a data row has no anchor text
    """
    problems = find_first(root, has_class("problems"))
    if problems is None:
        raise ElementNotFoundError('<table class="problems">')

    body = find_first(problems, is_element("tbody")) or problems
    rows = [row for row in element_children(body) if row.tag == "tr"]

    ids = []
    # First row holds the column headers
    for index, row in enumerate(rows[1:], start=1):
        anchor = find_first(row, is_element("a"))
        if anchor is None:
            raise MalformedPageError(f"Problem row {index} has no link")

        text = collect_text(anchor)
        problem_id = text.strip() if text is not None else ""
        if not problem_id:
            raise MalformedPageError(f"Problem row {index} has an empty id")

        ids.append(problem_id)

    return ids


class ContestPageParser:
    """Parser for extracting data from Codeforces contest HTML pages."""

    def __init__(self, fetcher: PageFetcherProtocol, url_parser: type[URLParser] = URLParser):
        """
        Initialize parser.

        Args:
            fetcher: Page fetcher producing node trees
            url_parser: URL builder used for contest URLs
        """
        self.fetcher = fetcher
        self.url_parser = url_parser

    async def parse_problem_ids(self, identifier: ContestIdentifier) -> list[str]:
        """
        Fetch contest page and extract its problem ids in listing order.
        """
        url = self.url_parser.build_contest_url(identifier)
        logger.info(f"Parsing contest page: {url}")

        root = await self.fetcher.fetch_tree(url)

        try:
            ids = extract_problem_ids(root)
        except ParsingError as e:
            logger.error(f"Failed to parse contest page {url}: {e}")
            raise

        logger.info(f"Found {len(ids)} problems in contest {identifier}: {', '.join(ids)}")
        return ids
