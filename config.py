"""Generator profiles and the per-run configuration built from them.

Two generations of the generator exist. They share one pipeline and differ only
in the settings collected in a `Profile`.
"""

import dataclasses
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

INDEX_URL = "https://fonts.google.com/metadata/icons"
ICON_URL = "https://fonts.gstatic.com/s/i/{family}/{name}/v{version}/24px.svg?download=true"
USER_AGENT = "elm-material-icons-generator/1.0"

# Every family name starts with this; it becomes the nested module path.
FAMILY_PREFIX = "Material Icons"


class DocLayout(enum.Enum):
    ONE_PER_SYMBOL = "one-per-symbol"
    JOINED = "joined"


@dataclass(frozen=True)
class Profile:
    name: str
    import_preamble: str
    doc_layout: DocLayout
    signature: str
    digit_names: Dict[str, str]
    attributes_to_remove: Tuple[str, ...]
    auxiliary_modules: Tuple[str, ...]
    # (regex, replacement) applied after the fixed rename table.
    extra_renames: Tuple[Tuple[str, str], ...] = ()
    purge_cache: bool = False
    root_call: str = "icon"


@dataclass(frozen=True)
class Config:
    root: Path
    profile: Profile
    retry_delay: float = 5.0
    max_attempts: Optional[int] = None
    purge_cache: bool = False
    html_elm: Path = field(init=False)
    sot_dir: Path = field(init=False)
    out_dir: Path = field(init=False)
    src_dir: Path = field(init=False)

    def __post_init__(self):
        # Derived paths; frozen dataclasses need object.__setattr__.
        object.__setattr__(self, "html_elm", self.root / "node_modules" / ".bin" / "html-elm")
        object.__setattr__(self, "sot_dir", self.root / "gen" / "tmp" / "sot")
        object.__setattr__(self, "out_dir", self.root / "gen" / "tmp" / "out")
        object.__setattr__(self, "src_dir", self.root / "src")

    @property
    def icons_dir(self) -> Path:
        return self.sot_dir / "icons"

    @property
    def index_path(self) -> Path:
        return self.sot_dir / "icons.json"

    @property
    def auxiliary_dir(self) -> Path:
        return self.src_dir / "Material" / "Icons"


_V1_ATTRIBUTES = (
    "class",
    "clip-path",
    "display",
    "height",
    "version",
    "width",
    "x",
    "xml:space",
    "xmlns",
    "xmlns:xlink",
    "y",
)

_V1_PREAMBLE = """\
-}

import Material.Icons.Coloring exposing (Coloring)
import Material.Icons.Internal exposing (icon)
import Svg exposing (Svg, circle, g, path, polygon, polyline, rect, use, svg)
import Svg.Attributes exposing (baseProfile, clipRule, cx, cy, d, enableBackground, fill, fillOpacity, fillRule, id, overflow, points, r, viewBox, xlinkHref)
"""

_V2_PREAMBLE = """\
-}

import Material.Icons.Internal exposing (icon)
import Material.Icons.Types exposing (Icon)
import Svg exposing (Attribute, circle, ellipse, g, line, path, polygon, polyline, rect, use, svg)
import Svg.Attributes exposing (baseProfile, clipRule, cx, cy, d, enableBackground, fill, fillOpacity, fillRule, id, overflow, points, r, rx, ry, viewBox, x, x1, x2, xlinkHref, y, y1, y2)


o : String -> Attribute msg
o =
    Svg.Attributes.opacity


t : String -> Attribute msg
t =
    Svg.Attributes.transform
"""

V1 = Profile(
    name="v1",
    import_preamble=_V1_PREAMBLE,
    doc_layout=DocLayout.ONE_PER_SYMBOL,
    signature="{name} : Int -> Coloring -> Svg msg",
    digit_names={
        "360": "three_sixty",
        "3d_rotation": "three_d_rotation",
        "4k": "four_k",
    },
    attributes_to_remove=_V1_ATTRIBUTES,
    auxiliary_modules=("Coloring.elm", "Internal.elm"),
)

V2 = Profile(
    name="v2",
    import_preamble=_V2_PREAMBLE,
    doc_layout=DocLayout.JOINED,
    signature="{name} : Icon msg",
    digit_names={
        "10k": "ten_k",
        "10mp": "ten_mp",
        "11mp": "eleven_mp",
        "123": "one_two_three",
        "12mp": "twelve_mp",
        "13mp": "thirteen_mp",
        "14mp": "fourteen_mp",
        "15mp": "fifteen_mp",
        "16mp": "sixteen_mp",
        "17mp": "seventeen_mp",
        "18mp": "eighteen_mp",
        "19mp": "nineteen_mp",
        "1k": "one_k",
        "1k_plus": "one_k_plus",
        "1x_mobiledata": "one_x_mobiledata",
        "20mp": "twenty_mp",
        "21mp": "twenty_one_mp",
        "22mp": "twenty_two_mp",
        "23mp": "twenty_three_mp",
        "24mp": "twenty_four_mp",
        "2k": "two_k",
        "2k_plus": "two_k_plus",
        "2mp": "two_mp",
        "30fps": "thirty_fps",
        "30fps_select": "thirty_fps_select",
        "360": "three_sixty",
        "3d_rotation": "three_d_rotation",
        "3g_mobiledata": "three_g_mobiledata",
        "3k": "three_k",
        "3k_plus": "three_k_plus",
        "3mp": "three_mp",
        "3p": "three_p",
        "4g_mobiledata": "four_g_mobiledata",
        "4g_plus_mobiledata": "four_g_plus_mobiledata",
        "4k": "four_k",
        "4k_plus": "four_k_plus",
        "4mp": "four_mp",
        "5g": "five_g",
        "5k": "five_k",
        "5k_plus": "five_k_plus",
        "5mp": "five_mp",
        "60fps": "sixty_fps",
        "60fps_select": "sixty_fps_select",
        "6_ft_apart": "six_ft_apart",
        "6k": "six_k",
        "6k_plus": "six_k_plus",
        "6mp": "six_mp",
        "7k": "seven_k",
        "7k_plus": "seven_k_plus",
        "7mp": "seven_mp",
        "8k": "eight_k",
        "8k_plus": "eight_k_plus",
        "8mp": "eight_mp",
        "9k": "nine_k",
        "9k_plus": "nine_k_plus",
        "9mp": "nine_mp",
    },
    attributes_to_remove=tuple(a for a in _V1_ATTRIBUTES if a not in ("x", "y")),
    auxiliary_modules=("Types.elm", "Internal.elm"),
    extra_renames=(
        (r'(?<![\w.-])opacity "', 'o "'),
        (r'(?<![\w.-])transform "', 't "'),
    ),
    purge_cache=True,
)

PROFILES = {p.name: p for p in (V1, V2)}


def make_config(
    root: Path,
    profile: str = "v1",
    retry_delay: float = 5.0,
    max_attempts: Optional[int] = None,
    purge_cache: Optional[bool] = None,
) -> Config:
    """Bind a profile to a project root. `purge_cache=None` defers to the profile."""
    p = PROFILES[profile]
    return Config(
        root=Path(root).resolve(),
        profile=p,
        retry_delay=retry_delay,
        max_attempts=max_attempts,
        purge_cache=p.purge_cache if purge_cache is None else purge_cache,
    )


def with_profile(config: Config, **changes) -> Config:
    """Copy of `config` with some profile fields replaced."""
    return dataclasses.replace(config, profile=dataclasses.replace(config.profile, **changes))
