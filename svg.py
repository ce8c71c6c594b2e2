import re
from typing import Iterable

import lxml.html

XML_DECL_RE = re.compile(r"<\?xml[^>]+>\n")
# Ends at the first ">", not at "-->". Google's comments never contain one.
COMMENT_RE = re.compile(r"<!--[^>]+>\n")
# Greedy on purpose: spans from the first opening tag to the last closing tag.
DEFS_RE = re.compile(r"<defs.*</defs>", re.DOTALL)
CLIP_PATH_RE = re.compile(r"<clipPath.*</clipPath>", re.DOTALL)
SELF_CLOSING_RE = re.compile(r"<([\w:-]+)([^<>]*?)\s*/>")


def is_svg(markup: str) -> bool:
    """A download is usable when it starts with a root tag or an XML declaration.

    Anything else, typically an HTML error page, means the fetch failed.
    """
    return markup.startswith("<svg") or markup.startswith("<?xml")


def attribute_re(attr: str) -> "re.Pattern[str]":
    return re.compile(rf' {re.escape(attr)}="[^"]*"')


def normalize(markup: str, attributes_to_remove: Iterable[str]) -> str:
    markup = XML_DECL_RE.sub("", markup)
    markup = COMMENT_RE.sub("", markup)
    markup = DEFS_RE.sub("", markup)
    markup = CLIP_PATH_RE.sub("", markup)

    for attr in attributes_to_remove:
        markup = attribute_re(attr).sub(" ", markup)

    return markup


def parse_fragment(markup: str):
    """Parse normalized markup the way a browser would.

    The HTML parser lower-cases tag and attribute names (viewBox becomes viewbox)
    and keeps prefixed names such as xlink:href verbatim, which is what html-elm
    sees too. Namespace declarations are gone after `normalize`, so an XML parser
    would reject those prefixes.
    """
    # HTML has no self-closing syntax for unknown tags; spell the end tags out.
    markup = SELF_CLOSING_RE.sub(r"<\1\2></\1>", markup.strip())
    root = lxml.html.fragment_fromstring(markup)
    if root.tag != "svg":
        raise ValueError(f"Expected an <svg> root element, got <{root.tag}>")
    return root
