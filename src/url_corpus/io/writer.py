import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

logger = logging.getLogger(__name__)


class UrlFileWriter:
    """Writes one URL per line, replacing the file on every run."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def write(self, urls: Sequence[str]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # No trailing newline after the last URL
        self.path.write_text("\n".join(urls), encoding="utf-8")
        logger.info("Wrote %d urls to %s", len(urls), self.path)
        return self.path


def summary_line(path: Union[str, Path], count: int) -> str:
    return f"Created '{path}' with {count} urls."


def echo_urls(urls: Sequence[str], path: Union[str, Path], stream: Optional[TextIO] = None) -> None:
    """Print every URL, a blank line, then the summary line."""
    out = stream if stream is not None else sys.stdout
    for url in urls:
        print(url, file=out)
    print(file=out)
    print(summary_line(path, len(urls)), file=out)
