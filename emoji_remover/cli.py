from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from emoji_remover.cleaner import EmojiCleaner
from emoji_remover.commands import CommandRegistry
from emoji_remover.config_loader import LoadedConfig, discover_config_file, load_config_file
from emoji_remover.core import BUSY_POLICIES, Options, build_context
from emoji_remover.host import StandaloneHost
from emoji_remover.invocation import ToolConfiguration
from emoji_remover.plugin import COMMAND_NAME, EmojiRemoverPlugin
from emoji_remover.state import InvocationState


LOGGER_NAME = "emoji-remover"


def _configure_logging(verbose: bool) -> logging.Logger:
    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers[:] = [handler]  # one handler, even across repeated main() calls
    logger.propagate = False
    return logger


async def _run(registry: CommandRegistry, raw: dict) -> InvocationState | None:
    task = registry.invoke(COMMAND_NAME, raw)
    if task is None:
        return None
    invocation = await task
    return invocation.state


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="emoji-clean")
    parser.add_argument(
        "--include",
        nargs="+",
        default=[],
        metavar="PATTERN",
        help="Glob patterns to include (e.g. '*.rs' 'src/**'). Appended after configured patterns.",
    )
    parser.add_argument(
        "--exclude",
        nargs="+",
        default=[],
        metavar="PATTERN",
        help="Glob patterns to exclude (e.g. 'target/*' '*.log'). Appended after configured patterns.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (*.toml, *.json, *.yaml, *.yml). "
        "Defaults to ~/.config/emoji-remover/config.* if present.",
    )
    parser.add_argument(
        "--plugin-root",
        type=Path,
        default=None,
        help="Directory containing target/release/emoji-remover. Also supports EMOJI_REMOVER_ROOT.",
    )
    parser.add_argument(
        "--cwd",
        type=Path,
        default=None,
        help="Directory to run the tool in (defaults to the current directory).",
    )
    parser.add_argument(
        "--on-busy",
        choices=list(BUSY_POLICIES),
        default=None,
        help="What to do when an invocation is already running.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Verbose logs.",
    )
    args = parser.parse_args(argv)

    logger = _configure_logging(args.verbose)

    config_path: Path | None = args.config
    if config_path is not None and not config_path.is_file():
        logger.error("Config file not found: %s", config_path)
        return 2
    if config_path is None:
        config_path = discover_config_file()

    loaded = LoadedConfig(path=None, tool=ToolConfiguration())
    if config_path is not None:
        try:
            loaded = load_config_file(config_path)
        except Exception as e:
            logger.error("Failed to load config @ %s: %s", config_path, e)
            return 2
        logger.debug("Loaded config %s", config_path)

    options = Options(
        plugin_root=args.plugin_root or loaded.plugin_root,
        cwd=args.cwd,
        on_busy=args.on_busy or loaded.on_busy or "reject",
    )
    ctx = build_context(host=StandaloneHost(logger), options=options, logger=logger)

    plugin = EmojiRemoverPlugin()
    registry = CommandRegistry()
    plugin.setup(registry, ctx, defaults=loaded.tool, cleaner=EmojiCleaner(ctx))

    raw = {"include": list(args.include), "exclude": list(args.exclude)}
    try:
        ToolConfiguration.from_dict(raw)
    except ValueError as e:
        logger.error("Invalid patterns: %s", e)
        return 2

    state = asyncio.run(_run(registry, raw))
    return 0 if state is InvocationState.SUCCEEDED else 1
