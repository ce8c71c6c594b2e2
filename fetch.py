import logging
import time
import urllib.request
from pathlib import Path
from typing import Callable, Optional

from config import ICON_URL, INDEX_URL, USER_AGENT, Config
from icons import Icon, Index, load_index
from svg import is_svg
from utils import FetchError


def download(url: str) -> bytes:
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(req) as response:
        return response.read()


def fetch_index(config: Config, download: Callable[[str], bytes] = download) -> Index:
    """Download the icon index, keep a copy next to the icon cache and parse it."""
    logging.info(f"Downloading icon index from {INDEX_URL}")
    raw = download(INDEX_URL)

    config.sot_dir.mkdir(parents=True, exist_ok=True)
    config.index_path.write_bytes(raw)
    return load_index(raw)


class IconCache:
    """Raw SVG downloads, one file per (family, version, name).

    A new icon version gets a new path, so stale files never need invalidating.
    """

    def __init__(
        self,
        root: Path,
        download: Callable[[str], bytes] = download,
        sleep: Callable[[float], None] = time.sleep,
        retry_delay: float = 5.0,
        max_attempts: Optional[int] = None,
    ):
        self.root = root
        self.download = download
        self.sleep = sleep
        self.retry_delay = retry_delay
        self.max_attempts = max_attempts

    def path_for(self, family: str, icon: Icon) -> Path:
        return self.root / family / f"v{icon.version}-{icon.name}.svg"

    @staticmethod
    def url_for(family: str, icon: Icon) -> str:
        return ICON_URL.format(
            family=family.lower().replace(" ", ""),
            name=icon.name,
            version=icon.version,
        )

    def fetch(self, family: str, icon: Icon, force: bool = False) -> Path:
        path = self.path_for(family, icon)

        if force or not path.exists():
            url = self.url_for(family, icon)
            logging.debug(f"Downloading {url}")
            data = self.download(url)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        return path

    def confirm(self, family: str, icon: Icon) -> str:
        """Return the cached SVG, downloading it again until it looks like one.

        The asset server now and then answers with an error page. There is no
        limit on retries unless `max_attempts` is set.
        """
        path = self.fetch(family, icon)
        retries = 0

        while True:
            markup = path.read_text(encoding="utf-8", errors="replace")
            if is_svg(markup):
                return markup

            retries += 1
            if self.max_attempts is not None and retries > self.max_attempts:
                raise FetchError(
                    f"Download failed for `{icon.name}` ({family}) after {self.max_attempts} retries"
                )

            logging.warning(f"Download failed for `{icon.name}`, wait a bit whilst I reset.")
            self.sleep(self.retry_delay)
            self.fetch(family, icon, force=True)

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "IconCache":
        return cls(
            config.icons_dir,
            retry_delay=config.retry_delay,
            max_attempts=config.max_attempts,
            **kwargs,
        )
