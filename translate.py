"""Turn normalized SVG markup into the body of an Elm icon function.

The heavy lifting is done by html-elm, an external node tool. What it prints is
plain `Svg` code using the lower-cased names an HTML parser produces, so the
output goes through `ElmAdapter` to line it up with `Svg.Attributes` and the
root `icon` helper of the generated modules.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Protocol, Sequence, Tuple

from svg import parse_fragment
from utils import ExternalToolError

# Applied in order, plain substring replacement.
RENAMES: Sequence[Tuple[str, str]] = (
    ("baseprofile", "baseProfile"),
    ("clip-rule", "clipRule"),
    ("clippath", "Svg.clipPath"),
    ("enable-background", "enableBackground"),
    ("fill-opacity", "fillOpacity"),
    ("fill-rule", "fillRule"),
    ("viewbox", "viewBox"),
    ("xlink:href", "xlinkHref"),
)

INDENT = "    "


class Translator(Protocol):
    def translate(self, markup: str) -> str:
        ...


class Formatter(Protocol):
    def format(self, directory: Path) -> None:
        ...


def run_tool(cmd: List[str], **kwargs) -> str:
    logging.debug("Running %s", cmd[0])
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True, **kwargs)
    except FileNotFoundError as e:
        raise ExternalToolError(f"{cmd[0]} is not installed") from e
    except subprocess.CalledProcessError as e:
        raise ExternalToolError(
            f"{Path(cmd[0]).name} exited with {e.returncode}: {e.stderr.strip()}"
        ) from e
    return result.stdout


class HtmlElmTranslator:
    def __init__(self, binary: Path):
        self.binary = binary

    def translate(self, markup: str) -> str:
        return run_tool([str(self.binary), markup])


def _elm_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class LxmlTranslator:
    """In-process stand-in for html-elm, for machines without node.

    Prints the same shape html-elm does: `tag [ attrs ] [ children ]`, with
    children one per line and attribute names left as the parser reports them.
    """

    def translate(self, markup: str) -> str:
        return self._node(parse_fragment(markup), 0)

    def _node(self, elem, depth: int) -> str:
        attrs = ", ".join(f"{k} {_elm_string(v)}" for k, v in elem.attrib.items())
        head = f"{elem.tag} [ {attrs} ]" if attrs else f"{elem.tag} []"

        children = [c for c in elem if isinstance(c.tag, str)]
        if not children:
            return f"{head} []"

        pad = INDENT * (depth + 1)
        lines = [head]
        for i, child in enumerate(children):
            lines.append(f"{pad}{',' if i else '['} {self._node(child, depth + 1)}")
        lines.append(f"{pad}]")
        return "\n".join(lines)


class ElmAdapter:
    def __init__(self, root_call: str = "icon", extra_renames: Sequence[Tuple[str, str]] = ()):
        self.root_call = root_call
        self.extra_renames = [(re.compile(p), r) for p, r in extra_renames]

    def adapt(self, code: str) -> str:
        code = re.sub(r"^svg", self.root_call, code, flags=re.MULTILINE)
        for old, new in RENAMES:
            code = code.replace(old, new)
        for pattern, new in self.extra_renames:
            code = pattern.sub(new, code)
        code = code.replace("\n", "\n" + INDENT).strip()

        if not code.startswith(self.root_call):
            raise ExternalToolError(f"Translator output does not start with an svg root: {code[:40]!r}")
        return code


class ElmFormatter:
    def __init__(self, binary: str = "elm-format"):
        self.binary = binary

    def format(self, directory: Path) -> None:
        logging.info(f"Formatting {directory}")
        run_tool([self.binary, str(directory), "--yes"], cwd=directory.parent)
