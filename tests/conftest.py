import json

import pytest

from config import INDEX_URL, make_config
from icons import XSSI_PREFIX

SAMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" height="24" viewBox="0 0 24 24" width="24">'
    '<path d="M0 0h24v24H0z" fill="none"/>'
    '<path d="M15.5 14h-.79l-.28-.27z"/></svg>'
)

ERROR_PAGE = b"<!DOCTYPE html><html><body>Error 500 (Server Error)!!1</body></html>"

ALPHA_INDEX = {
    "families": ["Alpha"],
    "icons": [
        {
            "name": "search",
            "version": 1,
            "categories": ["Action"],
            "unsupported_families": [],
        },
        {
            "name": "360",
            "version": 2,
            "categories": ["Action"],
            "unsupported_families": ["Alpha"],
        },
    ],
}


def index_bytes(data) -> bytes:
    return (XSSI_PREFIX + json.dumps(data)).encode("utf-8")


class FakeDownloader:
    """Serves canned responses; a list is consumed one item per request."""

    def __init__(self, responses=None, default=SAMPLE_SVG.encode("utf-8")):
        self.responses = dict(responses or {})
        self.default = default
        self.calls = []

    def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        body = self.responses.get(url, self.default)
        if isinstance(body, list):
            return body.pop(0) if len(body) > 1 else body[0]
        return body


class FakeTranslator:
    """Prints what html-elm prints for a single-path icon."""

    def __init__(self):
        self.inputs = []

    def translate(self, markup: str) -> str:
        self.inputs.append(markup)
        return 'svg [ viewbox "0 0 24 24" ]\n    [ path [ d "M1 1" ] []\n    ]\n'


class FakeFormatter:
    def __init__(self):
        self.directories = []

    def format(self, directory):
        self.directories.append(directory)


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path, profile="v1", retry_delay=0.5)


@pytest.fixture
def alpha_downloader():
    return FakeDownloader({INDEX_URL: index_bytes(ALPHA_INDEX)})
