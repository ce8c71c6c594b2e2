"""Assemble one Elm module per icon family.

A module is appended to in a fixed order: header with the exposing list, one
`@docs` section per category, the import preamble, then one function per icon.
"""

from pathlib import Path
from typing import Callable, Dict, List, Mapping

from config import FAMILY_PREFIX, Config, DocLayout
from fetch import IconCache
from icons import Icon, Index
from svg import normalize
from translate import ElmAdapter, Translator
from utils import DataIntegrityError, append_to_file, humanize


def symbol_name(name: str, digit_names: Mapping[str, str]) -> str:
    """Elm identifier for an icon; Elm names cannot start with a digit."""
    if name in digit_names:
        return digit_names[name]
    if name[:1].isdigit():
        raise DataIntegrityError(
            f"An icon can't have a number as the first character (icon: `{name}`)"
        )
    return name


def _family_to(family: str, sep: str) -> str:
    s = family.replace(FAMILY_PREFIX, FAMILY_PREFIX.replace(" ", sep))
    return s.replace(" ", sep, 1).replace(" ", "")


def module_name(family: str) -> str:
    return _family_to(family, ".")


def module_path(family: str) -> Path:
    return Path(_family_to(family, "/") + ".elm")


class IconRenderer:
    """Cached download -> normalized SVG -> Elm expression."""

    def __init__(self, cache: IconCache, translator: Translator, config: Config):
        self.cache = cache
        self.translator = translator
        self.attributes_to_remove = config.profile.attributes_to_remove
        self.adapter = ElmAdapter(config.profile.root_call, config.profile.extra_renames)

    def render(self, family: str, icon: Icon) -> str:
        markup = self.cache.confirm(family, icon)
        markup = normalize(markup, self.attributes_to_remove)
        return self.adapter.adapt(self.translator.translate(markup))


def docs_lines(symbols: List[str], layout: DocLayout) -> str:
    if not symbols:
        return ""
    if layout is DocLayout.JOINED:
        return f"@docs {', '.join(symbols)}\n"
    return "".join(f"@docs {s}\n" for s in symbols)


def write_module(
    family: str,
    index: Index,
    categories: Dict[str, List[Icon]],
    config: Config,
    render: Callable[[str, Icon], str],
    progress: Callable = iter,
) -> Path:
    profile = config.profile
    out_path = config.out_dir / module_path(family)

    supported = [i for i in index.icons if i.supports(family)]
    supported_names = {i.name for i in supported}

    def sym(icon: Icon) -> str:
        return symbol_name(icon.name, profile.digit_names)

    # Header
    exposed = ", ".join(sym(i) for i in supported)
    append_to_file(out_path, f"module {module_name(family)} exposing ({exposed})\n\n{{-|\n")

    # Docs
    for cat_name, cat_icons in categories.items():
        symbols = [
            sym(i)
            for i in sorted(cat_icons, key=lambda i: i.name)
            if i.name in supported_names
        ]
        append_to_file(
            out_path,
            f"\n# {humanize(cat_name)}\n\n" + docs_lines(symbols, profile.doc_layout),
        )

    # Imports
    append_to_file(out_path, profile.import_preamble)

    # Icons
    for icon in progress(supported):
        name = sym(icon)
        code = render(family, icon)
        signature = profile.signature.format(name=name)
        append_to_file(out_path, f"\n\n{{-|-}}\n{signature}\n{name} =\n    {code}\n")

    return out_path
