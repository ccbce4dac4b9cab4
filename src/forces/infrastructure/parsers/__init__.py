"""Parsers for extracting data from Codeforces pages."""

from .contest_page_parser import ContestPageParser, extract_problem_ids
from .problem_page_parser import ProblemPageParser, extract_problem_name, extract_sample_tests
from .url_parser import URLParser, URLParsingError
from .interfaces import (
    HTTPClientProtocol,
    PageFetcherProtocol,
    ParsingError,
    URLParserProtocol,
)

__all__ = [
    "ContestPageParser",
    "HTTPClientProtocol",
    "PageFetcherProtocol",
    "ParsingError",
    "ProblemPageParser",
    "URLParser",
    "URLParserProtocol",
    "URLParsingError",
    "extract_problem_ids",
    "extract_problem_name",
    "extract_sample_tests",
]
