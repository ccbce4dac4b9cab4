from forces.config import Settings
from forces.infrastructure.http_client import AsyncHTTPClient
from forces.services.contest import ContestService
from forces.services.runner import SolutionRunner
from forces.services.templates import TemplateService
from forces.services.train import TrainService
from forces.services.workspace import WorkspaceWriter


def create_contest_service(http_client: AsyncHTTPClient, settings: Settings) -> ContestService:
    """Factory function to create contest service with all dependencies."""
    from forces.infrastructure.page_fetcher import PageFetcher
    from forces.infrastructure.parsers import ContestPageParser, ProblemPageParser, URLParser

    url_parser = URLParser.for_host(settings.host)
    fetcher = PageFetcher(http_client)

    return ContestService(
        contest_parser=ContestPageParser(fetcher, url_parser),
        problem_parser=ProblemPageParser(fetcher, url_parser),
    )


def create_train_service(http_client: AsyncHTTPClient, settings: Settings) -> TrainService:
    """Factory function to create train service with all dependencies."""
    from forces.infrastructure.parsers import URLParser

    return TrainService(
        contest_service=create_contest_service(http_client, settings),
        writer=WorkspaceWriter(url_parser=URLParser.for_host(settings.host)),
        config_dir=settings.config_dir,
    )


__all__ = [
    "ContestService",
    "SolutionRunner",
    "TemplateService",
    "TrainService",
    "WorkspaceWriter",
    "create_contest_service",
    "create_train_service",
]
