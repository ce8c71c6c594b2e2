import re
from pathlib import Path

import pytest

from config import V1, V2, with_profile
from fetch import IconCache
from icons import Icon, Index, build_categories, load_index
from pack import IconRenderer, module_name, module_path, symbol_name, write_module
from utils import DataIntegrityError

from conftest import ALPHA_INDEX, FakeDownloader, FakeTranslator, index_bytes


def fake_render(family, icon):
    return f'icon [ viewBox "0 0 24 24" ]\n        [ path [ d "{icon.name}" ] [] ]'


def exposed(module: str):
    m = re.match(r"module \S+ exposing \((.*)\)\n", module)
    return [s.strip() for s in m.group(1).split(",") if s.strip()]


def documented(module: str):
    return [s.strip() for line in re.findall(r"^@docs (.*)$", module, re.M) for s in line.split(",")]


def defined(module: str):
    return re.findall(r"^(\w+) =$", module, re.M)


@pytest.mark.parametrize(
    "name, symbol",
    [("360", "three_sixty"), ("3d_rotation", "three_d_rotation"), ("4k", "four_k"), ("search", "search")],
)
def test_symbol_name(name, symbol):
    assert symbol_name(name, V1.digit_names) == symbol


def test_symbol_name_rejects_unknown_digits():
    with pytest.raises(DataIntegrityError, match="10k"):
        symbol_name("10k", V1.digit_names)
    assert symbol_name("10k", V2.digit_names) == "ten_k"


@pytest.mark.parametrize(
    "family, name, path",
    [
        ("Material Icons", "Material.Icons", "Material/Icons.elm"),
        ("Material Icons Outlined", "Material.Icons.Outlined", "Material/Icons/Outlined.elm"),
        ("Material Icons Two Tone", "Material.Icons.TwoTone", "Material/Icons/TwoTone.elm"),
        ("Alpha", "Alpha", "Alpha.elm"),
    ],
)
def test_module_identifiers(family, name, path):
    assert module_name(family) == name
    assert module_path(family) == Path(path)


def test_alpha_module(config):
    index = load_index(index_bytes(ALPHA_INDEX))
    path = write_module("Alpha", index, build_categories(index.icons), config, fake_render)

    assert path == config.out_dir / "Alpha.elm"
    module = path.read_text()

    assert module.startswith("module Alpha exposing (search)\n\n{-|\n\n# Action\n\n@docs search\n-}\n")
    assert exposed(module) == ["search"]
    assert documented(module) == ["search"]
    assert defined(module) == ["search"]
    assert "360" not in module
    assert "three_sixty" not in module
    assert (
        '\n\n{-|-}\nsearch : Int -> Coloring -> Svg msg\nsearch =\n'
        '    icon [ viewBox "0 0 24 24" ]\n        [ path [ d "search" ] [] ]\n'
    ) in module


SHARP = "Material Icons Sharp"

INDEX = Index(
    icons=(
        Icon("zoom_in", 1, ("action",)),
        Icon("wifi", 3, ("device",), (SHARP,)),
        Icon("360", 2, ("maps",)),
        Icon("alarm", 1, ("action",)),
        Icon("blank", 1),
    ),
    families=("Material Icons", SHARP),
)


def test_export_list_matches_docs_and_functions(config):
    path = write_module(SHARP, INDEX, build_categories(INDEX.icons), config, fake_render)
    module = path.read_text()

    assert path == config.out_dir / "Material" / "Icons" / "Sharp.elm"
    assert exposed(module) == ["zoom_in", "three_sixty", "alarm", "blank"]
    assert set(exposed(module)) == set(documented(module)) == set(defined(module))
    assert "wifi" not in module


def test_docs_are_sorted_within_categories(config):
    module = write_module(
        "Material Icons", INDEX, build_categories(INDEX.icons), config, fake_render
    ).read_text()

    assert "# Action\n\n@docs alarm\n@docs zoom_in\n" in module
    assert "# Device\n\n@docs wifi\n" in module
    assert "# Maps\n\n@docs three_sixty\n" in module
    # Functions follow index order.
    assert defined(module) == ["zoom_in", "wifi", "three_sixty", "alarm", "blank"]


def test_joined_docs_layout(config):
    config = with_profile(config, doc_layout=V2.doc_layout, signature=V2.signature)
    module = write_module(
        SHARP, INDEX, build_categories(INDEX.icons), config, fake_render
    ).read_text()

    assert "# Action\n\n@docs alarm, zoom_in\n" in module
    # No supported icons left in the category: heading only.
    assert "# Device\n\n\n#" in module
    assert "\nalarm : Icon msg\n" in module


def test_preamble_sits_between_docs_and_functions(config):
    module = write_module(
        "Material Icons", INDEX, build_categories(INDEX.icons), config, fake_render
    ).read_text()

    preamble = module.index(V1.import_preamble)
    assert module.rindex("@docs") < preamble < module.index("{-|-}")


def test_digit_name_aborts_family(config):
    index = Index(icons=(Icon("10k", 1),), families=("Alpha",))
    with pytest.raises(DataIntegrityError):
        write_module("Alpha", index, build_categories(index.icons), config, fake_render)


def test_renderer_composes_pipeline(tmp_path, config):
    translator = FakeTranslator()
    cache = IconCache(tmp_path / "icons", download=FakeDownloader())
    renderer = IconRenderer(cache, translator, config)

    code = renderer.render("Alpha", Icon("search", 1))

    assert translator.inputs == ['<svg   viewBox="0 0 24 24" ><path d="M0 0h24v24H0z" fill="none"/><path d="M15.5 14h-.79l-.28-.27z"/></svg>']
    assert code == 'icon [ viewBox "0 0 24 24" ]\n        [ path [ d "M1 1" ] []\n        ]'
