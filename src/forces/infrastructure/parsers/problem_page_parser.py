"""Parser for extracting problem data from HTML pages."""

from loguru import logger

from forces.domain.exceptions import ElementNotFoundError, MalformedPageError
from forces.domain.models import Problem, ProblemIdentifier, Test
from forces.infrastructure.tree import (
    Node,
    collect_text,
    element_children,
    find_first,
    has_class,
)

from .interfaces import PageFetcherProtocol, ParsingError
from .url_parser import URLParser


def _is_title_text(node: Node) -> bool:
    if not node.is_text():
        return False
    parent = node.parent
    return parent is not None and has_class("title")(parent)


def extract_problem_name(root: Node) -> str:
    """
    Extract the problem display name, e.g. "A. Watermelon".

    The first text node directly inside a class="title" element wins, which on
    problem pages is the statement header rather than the sample block titles.
    """
    title = find_first(root, _is_title_text)
    if title is None:
        raise ElementNotFoundError('<div class="title"> problem name')
    return title.text()


def _sample_text(element: Node, side: str, index: int) -> str:
    blocks = element_children(element)
    if not blocks:
        raise MalformedPageError(f"Sample {side} {index} has no <pre> block")

    # The <pre> block comes after the "Input"/"Output" caption
    text = collect_text(blocks[-1])
    if text is None:
        raise MalformedPageError(f"Sample {side} {index} has no text")
    # A newline right after <pre> is markup, not sample data
    return text.removeprefix("\n")


def extract_sample_tests(root: Node) -> list[Test]:
    """
    Extract sample tests in page order.

    Expected markup:

        <div class="sample-test">
            <div class="input"><div class="title">Input</div><pre>...</pre></div>
            <div class="output"><div class="title">Output</div><pre>...</pre></div>
            <div class="input">...</div>
            <div class="output">...</div>
        </div>

    Raises:
        ElementNotFoundError: If the sample-test block is missing
        MalformedPageError: If an input has no output or a block has no text
    """
    sample_test = find_first(root, has_class("sample-test"))
    if sample_test is None:
        raise ElementNotFoundError('<div class="sample-test">')

    children = element_children(sample_test)
    if len(children) % 2 != 0:
        raise MalformedPageError(
            f"Missing sample output for input {len(children) // 2} "
            f"({len(children)} sample blocks)"
        )

    tests = []
    for index in range(len(children) // 2):
        input_node = children[2 * index]
        output_node = children[2 * index + 1]
        tests.append(
            Test(
                input=_sample_text(input_node, "input", index),
                output=_sample_text(output_node, "output", index),
            )
        )

    return tests


class ProblemPageParser:
    """Parser for extracting data from Codeforces problem HTML pages."""

    def __init__(self, fetcher: PageFetcherProtocol, url_parser: type[URLParser] = URLParser):
        """
        Initialize parser.

        Args:
            fetcher: Page fetcher producing node trees
            url_parser: URL builder used for problem URLs
        """
        self.fetcher = fetcher
        self.url_parser = url_parser

    async def parse_problem(self, identifier: ProblemIdentifier) -> Problem:
        """
        Fetch problem page and extract its name and sample tests.
        """
        url = self.url_parser.build_problem_url(identifier)
        logger.debug(f"Parsing problem page: {url}")

        root = await self.fetcher.fetch_tree(url)

        try:
            name = extract_problem_name(root)
            tests = extract_sample_tests(root)
        except ParsingError as e:
            logger.error(f"Failed to parse problem page {url}: {e}")
            raise

        logger.info(f"Parsed problem {identifier}: {name} ({len(tests)} sample tests)")
        return Problem(id=identifier.problem_id, name=name, tests=tests)
