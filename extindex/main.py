import asyncio
import logging
import sys

from extindex.core.config import Settings
from extindex.domain.errors import IndexBuildError
from extindex.services.index_builder import build_index

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main() -> int:
    """
    Entry point for `python -m extindex` / `extindex-update`.

    Reads settings from the environment once, builds the index and returns
    the process exit status.
    """
    try:
        settings = Settings.from_env()
    except IndexBuildError as e:
        configure_logging()
        logger.error(f"Error: {e}")
        return 1

    configure_logging(settings.log_level)

    try:
        result = asyncio.run(build_index(settings))
    except IndexBuildError as e:
        logger.error(f"Index build aborted ({e.kind.value}): {e}")
        return 1

    if not result.succeeded:
        for failure in result.failures:
            logger.error(f"{failure.author}: {failure.repository} failed ({failure.kind}): {failure.message}")
        logger.error(f"{len(result.failures)} repositories could not be indexed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
