"""Last-known status of the article reader, for polling clients."""

from dataclasses import dataclass

from history_reader.models import FetchStatus
from history_reader.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StatusBoard:
    """Records the latest status published by an ArticleReader.

    Instances are callable so they can be passed as the reader's listener.
    """

    status: FetchStatus = FetchStatus.IDLE
    message: str = ""

    def __call__(self, status: FetchStatus, message: str) -> None:
        self.status = status
        self.message = message
        logger.debug("Status changed", status=str(status), message=message)
