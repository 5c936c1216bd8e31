"""Console-driven tier menu for lootview."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Literal, Optional, Sequence, Tuple

from lootview.core.types import JsonFetcher
from lootview.data.errors import LootDataError
from lootview.data.fetcher import RemoteFetcher
from lootview.services import NameResolver, ReportBuilder, TierAggregator, TierReportView

from .config import AppConfig, TierConfig, build_tier_locator, load_config
from .render import debug_enabled, render_error, render_menu, render_tier_report

logger = logging.getLogger(__name__)

MenuAction = Literal["tier", "all", "quit"]
MenuOption = Tuple[str, str, MenuAction, Optional[TierConfig]]

_QUIT_KEY = "0"
_INTRO = (
    "View the dungeon loot tables of the asset repository.\n"
    "Each selection issues several API requests; avoid repeating it too often."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lootview", description="Show dungeon loot tables and drop chances.")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument("--tier", action="append", default=[], metavar="ID",
                        help="Show this tier and exit (repeatable)")
    parser.add_argument("--all", action="store_true", help="Show every configured tier and exit")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Abort a tier on the first failure instead of skipping it")
    parser.add_argument("--max-depth", type=int, help="Expand nested loot tables up to this depth")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="Log every request")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def configure_logging(*, debug: bool = False, quiet: bool = False) -> None:
    if debug or debug_enabled():
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Start the CLI session and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(debug=args.debug, quiet=args.quiet)

    config = load_config(args.config)
    if args.strict is not None:
        config.strict = args.strict
    if args.max_depth is not None:
        if args.max_depth < 0:
            parser.error("--max-depth must be >= 0")
        config.max_depth = args.max_depth

    fetcher = RemoteFetcher(timeout=config.timeout)
    try:
        if args.all or args.tier:
            return _run_batch(config, fetcher, args.tier, select_all=args.all)
        _run_menu_loop(config, fetcher)
    finally:
        fetcher.close()
    return 0


def resolve_tier(config: AppConfig, tier: TierConfig, fetcher: JsonFetcher) -> TierReportView:
    """Aggregate one tier and build its report view."""
    aggregator = TierAggregator(fetcher, strict=config.strict)
    resolver = NameResolver(fetcher, asset_root=config.asset_root, max_depth=config.max_depth)
    builder = ReportBuilder(resolver, strict=config.strict)
    report = aggregator.aggregate(build_tier_locator(config, tier), tier.id)
    return builder.build(report)


def show_tier(config: AppConfig, tier: TierConfig, fetcher: JsonFetcher) -> bool:
    """Print the report of one tier; return False when it failed or is incomplete."""
    print(f"===== Resolving {tier.label} ({tier.id}) =====")
    try:
        view = resolve_tier(config, tier, fetcher)
    except LootDataError as exc:
        logger.debug("Tier %s failed", tier.id, exc_info=True)
        render_error(str(exc))
        return False
    render_tier_report(view)
    return not view.failures


def _run_batch(config: AppConfig, fetcher: JsonFetcher, tier_ids: Sequence[str], *, select_all: bool) -> int:
    if select_all:
        tiers = list(config.tiers)
    else:
        tiers = []
        for tier_id in tier_ids:
            try:
                tiers.append(config.find_tier(tier_id))
            except KeyError:
                render_error(f"Unknown tier '{tier_id}'. Known tiers: {', '.join(t.id for t in config.tiers)}")
                return 1
    results = [show_tier(config, tier, fetcher) for tier in tiers]
    return 0 if all(results) else 1


def build_menu_options(config: AppConfig) -> List[MenuOption]:
    options: List[MenuOption] = [
        (str(index), tier.label, "tier", tier) for index, tier in enumerate(config.tiers, start=1)
    ]
    all_key = "9" if len(config.tiers) < 9 else str(len(config.tiers) + 1)
    options.append((all_key, "All tiers", "all", None))
    options.append((_QUIT_KEY, "Quit", "quit", None))
    return options


def _prompt_menu_choice(options: Sequence[MenuOption]) -> MenuOption:
    keys = {option[0]: option for option in options}
    while True:
        render_menu("Dungeon tiers", [(key, label) for key, label, _, _ in options])
        try:
            choice = input("Select an option: ").strip()
        except EOFError:
            return keys[_QUIT_KEY]
        if choice in keys:
            return keys[choice]
        print("Invalid selection. Please enter one of the listed numbers.")


def _run_menu_loop(config: AppConfig, fetcher: JsonFetcher) -> None:
    print(_INTRO)
    options = build_menu_options(config)
    while True:
        _, _, action, tier = _prompt_menu_choice(options)
        if action == "quit":
            break
        if action == "all":
            for each in config.tiers:
                show_tier(config, each, fetcher)
            continue
        assert tier is not None
        show_tier(config, tier, fetcher)
    print("Goodbye!")
