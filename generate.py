#!python3
import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, Optional

from tqdm import tqdm

from config import PROFILES, Config, make_config
from fetch import IconCache, download, fetch_index
from icons import build_categories
from pack import IconRenderer, write_module
from translate import ElmFormatter, Formatter, HtmlElmTranslator, LxmlTranslator, Translator
from utils import GeneratorError, setup_logging


def project_root() -> Path:
    out = subprocess.run(
        ["git", "rev-parse", "--show-toplevel"],
        capture_output=True,
        text=True,
        check=True,
    )
    return Path(out.stdout.strip())


def prepare_directories(config: Config):
    if config.purge_cache:
        logging.info(f"Purging cache at {config.sot_dir}")
        shutil.rmtree(config.sot_dir, ignore_errors=True)
    config.icons_dir.mkdir(parents=True, exist_ok=True)

    shutil.rmtree(config.out_dir, ignore_errors=True)
    config.out_dir.mkdir(parents=True, exist_ok=True)


def relocate(config: Config):
    """Swap the generated modules into src/, keeping the hand-written ones.

    Not transactional: a failure half way leaves src/ as it is at that point.
    """
    src = config.src_dir
    aux_dir = config.auxiliary_dir
    src.mkdir(parents=True, exist_ok=True)

    for name in config.profile.auxiliary_modules:
        if (aux_dir / name).exists():
            shutil.move(str(aux_dir / name), str(src / name))

    shutil.rmtree(src / "Material", ignore_errors=True)
    for entry in sorted(config.out_dir.iterdir()):
        target = src / entry.name
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
        shutil.move(str(entry), str(target))
    shutil.rmtree(config.out_dir)

    aux_dir.mkdir(parents=True, exist_ok=True)
    for name in config.profile.auxiliary_modules:
        if (src / name).exists():
            shutil.move(str(src / name), str(aux_dir / name))


def run(
    config: Config,
    translator: Translator,
    formatter: Optional[Formatter] = None,
    download: Callable[[str], bytes] = download,
    cache: Optional[IconCache] = None,
    move: bool = True,
):
    prepare_directories(config)

    index = fetch_index(config, download)
    categories = build_categories(index.icons)

    if cache is None:
        cache = IconCache.from_config(config, download=download)
    renderer = IconRenderer(cache, translator, config)

    for family in index.families:
        logging.info(f"Processing {family}")
        path = write_module(
            family,
            index,
            categories,
            config,
            renderer.render,
            progress=lambda icons: tqdm(icons, desc=family, unit=" icons", leave=False),
        )
        logging.debug(f"Wrote {path}")

    if move:
        relocate(config)
        if formatter is not None:
            formatter.format(config.src_dir)

    logging.info(f"Generated {len(index.families)} modules from {len(index.icons)} icons.")


def main(args):
    root = args.root or project_root()
    config = make_config(
        root,
        profile=args.profile,
        retry_delay=args.retry_delay,
        max_attempts=args.max_attempts,
        purge_cache=args.purge_cache,
    )

    if args.translator == "lxml":
        translator = LxmlTranslator()
    else:
        translator = HtmlElmTranslator(config.html_elm)

    run(
        config,
        translator,
        formatter=None if args.no_format else ElmFormatter(),
        move=not args.no_move,
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Download the Material Icons and generate an Elm module per family."
    )
    parser.add_argument(
        "--root",
        type=Path,
        help="Project root (default: the enclosing git repository)",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default="v1",
        help="Generator generation to emulate",
    )
    cache_group = parser.add_mutually_exclusive_group()
    cache_group.add_argument(
        "--purge-cache",
        dest="purge_cache",
        action="store_true",
        default=None,
        help="Delete downloaded SVGs before running",
    )
    cache_group.add_argument(
        "--keep-cache",
        dest="purge_cache",
        action="store_false",
        help="Reuse downloaded SVGs",
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=5.0,
        help="Seconds to wait before downloading a broken SVG again",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up on an SVG after this many retries (default: never)",
    )
    parser.add_argument(
        "--translator",
        choices=["html-elm", "lxml"],
        default="html-elm",
        help="Convert SVG to Elm with html-elm or the built-in lxml translator",
    )
    parser.add_argument(
        "--no-move",
        action="store_true",
        help="Leave generated modules in gen/tmp/out",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Skip elm-format",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        main(args)
    except GeneratorError as e:
        logging.error(str(e))
        sys.exit(1)
