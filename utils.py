import logging
from pathlib import Path


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


class GeneratorError(Exception):
    """Base class for errors that abort a generation run."""


class DataIntegrityError(GeneratorError):
    """The icon index holds data we cannot turn into valid Elm."""


class FetchError(GeneratorError):
    """An icon never downloaded as valid SVG within the retry budget."""


class ExternalToolError(GeneratorError):
    """html-elm or elm-format failed, or returned something unexpected."""


def humanize(s: str) -> str:
    """Turn a category key such as "av" or "social_media" into a heading."""
    s = s.replace("_", " ").strip().lower()
    return s[:1].upper() + s[1:]


def append_to_file(path: Path, content: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(content)
