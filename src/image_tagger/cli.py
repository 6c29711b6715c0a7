"""Command line entry point printing the image reference for a working copy."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import resolve_config
from .errors import TaggingError
from .tagging import GitCommitTagger, TagSelection, is_valid_tag
from .utils import configure_logging, load_workdir_dotenv

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute a reproducible image tag from the git state of a working copy."
    )
    parser.add_argument("--image", dest="image_name", help="Image name used as the tag prefix, e.g. myapp")
    parser.add_argument(
        "--working-dir",
        type=Path,
        default=None,
        help="Directory inside the repository (default: current directory)",
    )
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML configuration file")
    parser.add_argument(
        "--tag-selection",
        choices=[item.value for item in TagSelection],
        default=None,
        help="Tie-break when several tags point at HEAD (default: smallest)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        "image_name": args.image_name,
        "working_dir": args.working_dir,
        "tag_selection": args.tag_selection,
        "log_level": args.log_level,
    }
    try:
        # The working directory may itself come from the config file or the
        # environment; resolve it before looking for its .env file.
        config = resolve_config(config_path=args.config, overrides=overrides)
        if load_workdir_dotenv(config.working_dir) is not None:
            config = resolve_config(config_path=args.config, overrides=overrides)
        configure_logging(config.log_level)
        options = config.to_options()
        fqn = GitCommitTagger().generate_fully_qualified_image_name(config.working_dir, options)
    except (TaggingError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    tag = fqn[len(options.image_name) + 1:]
    if not is_valid_tag(tag):
        logger.warning("Tag %r is not a valid docker tag and must be sanitised before pushing", tag)
    print(fqn)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
