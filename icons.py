import json
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

# Google prepends this to guard the JSON against being loaded as a script.
XSSI_PREFIX = ")]}'\n"


@dataclass(frozen=True)
class Icon:
    name: str
    version: int
    categories: Tuple[str, ...] = ()
    unsupported_families: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError(f"Icon name must not be empty (version={self.version})")

    @property
    def category(self) -> str:
        return self.categories[0] if self.categories else ""

    def supports(self, family: str) -> bool:
        return family not in self.unsupported_families


@dataclass(frozen=True)
class Index:
    icons: Tuple[Icon, ...]
    families: Tuple[str, ...]


def load_index(raw: Union[bytes, str]) -> Index:
    """Parse the metadata served at fonts.google.com/metadata/icons.

    Only the fields the generator needs are kept; `icons` keeps index order.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if raw.startswith(XSSI_PREFIX):
        raw = raw[len(XSSI_PREFIX):]

    data = json.loads(raw)
    icons = tuple(
        Icon(
            name=i["name"],
            version=int(i["version"]),
            categories=tuple(i.get("categories") or ()),
            unsupported_families=tuple(i.get("unsupported_families") or ()),
        )
        for i in data["icons"]
    )
    families = tuple(data["families"])

    logging.info(f"Loaded {len(icons)} icons in {len(families)} families.")
    return Index(icons=icons, families=families)


def build_categories(icons: Iterable[Icon]) -> Dict[str, List[Icon]]:
    """Group icons by primary category, groups sorted by name."""
    categories: Dict[str, List[Icon]] = {}
    for icon in icons:
        categories.setdefault(icon.category, []).append(icon)

    return dict(sorted(categories.items(), key=lambda kv: kv[0]))
