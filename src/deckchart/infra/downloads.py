"""Hand-off of generated files to the host environment."""

import webbrowser
from collections.abc import Callable

from deckchart.infra.logging import get_logger

logger = get_logger(__name__)

DownloadOpener = Callable[[str], object]


def open_in_browser(uri: str) -> bool:
    """Open ``uri`` with the platform's default handler, which starts the download.

    Returns:
        Whether a handler accepted the URI
    """
    opened = webbrowser.open(uri, new=2)
    if not opened:
        logger.warning("No handler available to open download", uri=uri)
    return opened
