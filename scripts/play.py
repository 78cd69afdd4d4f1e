#!/usr/bin/env python3
"""
Invaders - Play Script

Controls:
    Left/Right or A/D: Move the ship
    Space: Fire / start / restart / resume
    P: Pause
    M: Toggle sound
    ESC: Quit

Usage:
    python scripts/play.py
    python scripts/play.py --debug --fps 60
    python scripts/play.py --config my_config.yaml --mute
"""
import sys
import os
import argparse
import warnings
from pathlib import Path
from typing import Any, Dict

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Suppress pygame messages
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
warnings.filterwarnings('ignore', category=UserWarning, module='pygame')

from invaders.display.app import PygameApp
from invaders.game.errors import ConfigurationError
from invaders.utils.config_loader import load_config
from invaders.utils.logger import setup_logging


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Invaders - defend against the descending formation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/play.py                      # Play with default settings
  python scripts/play.py --debug              # Outline the play area
  python scripts/play.py --config my.yaml     # Use a custom config file
"""
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to YAML config file (default: config.yaml or config/default.yaml)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Draw play-area bounds"
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Simulation rate (default: from config)"
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Window width in pixels"
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Window height in pixels"
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Start with sound muted"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config)"
    )

    return parser.parse_args(argv)


def build_overrides(args) -> Dict[str, Any]:
    """Turn command line flags into nested config overrides."""
    overrides: Dict[str, Dict[str, Any]] = {}
    if args.fps is not None:
        overrides.setdefault("game", {})["fps"] = args.fps
    if args.debug:
        overrides.setdefault("display", {})["debug"] = True
    if args.width is not None:
        overrides.setdefault("display", {})["window_width"] = args.width
    if args.height is not None:
        overrides.setdefault("display", {})["window_height"] = args.height
    if args.mute:
        overrides.setdefault("audio", {})["muted"] = True
    if args.log_level is not None:
        overrides.setdefault("logging", {})["level"] = args.log_level
    return overrides


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config, overrides=build_overrides(args))
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(config.logging)

    print("\n" + "=" * 50)
    print("Invaders")
    print("=" * 50)
    print("Controls:")
    print("  Left/Right or A/D: Move")
    print("  Space: Fire / Start")
    print("  P: Pause   M: Mute   ESC: Quit")
    print("=" * 50 + "\n")

    app = PygameApp(config)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
