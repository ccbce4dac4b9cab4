"""Parser and builder for Codeforces contest URLs."""

import re
from urllib.parse import urlparse

from loguru import logger

from forces.domain.models import ContestIdentifier, ProblemIdentifier

from .interfaces import URLParserProtocol

DEFAULT_HOST = "codeforces.com"


class URLParsingError(ValueError):
    """Invalid URL format or unable to parse URL."""

    pass


class URLParser(URLParserProtocol):
    """Parser for Codeforces contest URLs and bare contest ids."""

    host = DEFAULT_HOST

    # Contest pattern matches: contest/1234 or gym/1234
    CONTEST_PATTERN = r"codeforces\.(?:com|ru)/(contest|gym)/(\d+)"
    CONTEST_ID_PATTERN = r"^\d+$"

    @classmethod
    def parse_contest_url(cls, url: str) -> ContestIdentifier:
        """
        Parse Codeforces contest URL or bare contest id into an identifier.
        """
        logger.debug(f"Parsing contest URL: {url}")

        url = url.strip()
        if re.match(cls.CONTEST_ID_PATTERN, url):
            return ContestIdentifier(contest_id=url)

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise URLParsingError(f"Invalid URL format: {url}")

        match = re.search(cls.CONTEST_PATTERN, url)
        if match:
            contest_type, contest_id = match.groups()
            is_gym = contest_type.lower() == "gym"

            identifier = ContestIdentifier(
                contest_id=contest_id,
                is_gym=is_gym,
            )

            logger.debug(f"Parsed URL to contest: {identifier}")
            return identifier

        raise URLParsingError(
            f"Unrecognized Codeforces contest URL format: {url}. "
            "Expected a contest id or https://codeforces.com/contest/<contest_id>"
        )

    @classmethod
    def build_contest_url(cls, identifier: ContestIdentifier) -> str:
        """
        Build contest URL from identifier.
        """
        url = f"https://{cls.host}/{identifier}"

        logger.debug(f"Built contest URL: {url}")
        return url

    @classmethod
    def build_problem_url(cls, identifier: ProblemIdentifier) -> str:
        """
        Build problem URL from identifier.
        """
        url = (
            f"https://{cls.host}/{identifier.contest}"
            f"/problem/{identifier.problem_id}"
        )

        logger.debug(f"Built problem URL: {url}")
        return url

    @classmethod
    def for_host(cls, host: str) -> type["URLParser"]:
        """Return a URLParser variant that builds URLs against another host."""
        if host == cls.host:
            return cls
        return type(cls.__name__, (cls,), {"host": host})
