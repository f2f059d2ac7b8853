"""
imposter_engine.cli — Command-line interface
============================================

Provides the CLI entry point for the engine.

Usage:
    python -m imposter_engine --demo                     # Play a bot game
    python -m imposter_engine --demo --players 6 --imposters 2
    python -m imposter_engine --check-config --config config.json

Demo mode can be enabled via:
    1. CLI flag: --demo
    2. Config key: demo_mode: True
    3. Environment variable: DEMO_MODE=true
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from ._runner_config import load_config, validate_config
from .demo import DemoTable


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="imposter-engine",
        description="Imposter Engine - game-session engine for the imposter party game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  imposter-engine --demo
  imposter-engine --demo --players 6 --imposters 2
  imposter-engine --check-config --config config.json
  DEMO_MODE=true imposter-engine --config config.json
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Play one complete game with bot players",
    )

    parser.add_argument(
        "--players",
        type=int,
        default=4,
        help="Number of bot players in demo mode (default: 4)",
    )

    parser.add_argument(
        "--imposters",
        type=int,
        default=1,
        help="Number of imposters in demo mode (default: 1)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the effective configuration and print it",
    )

    return parser.parse_args(argv)


def is_demo_mode(args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    """Check if demo mode is enabled via CLI, config, or environment."""
    if args.demo:
        return True
    if config.get("demo_mode"):
        return True
    if os.environ.get("DEMO_MODE", "").lower() in ("true", "1", "yes"):
        return True
    return False


def run_demo(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    table = DemoTable(
        players=args.players,
        imposters=args.imposters,
        config=config,
        protocol_mode=True,
    )
    try:
        result = table.play()
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    imposters = ", ".join(table.bot_name(pid) for pid in result["imposter_ids"])
    print()
    print(f"Winners:     {result['winners']}")
    print(f"Secret word: {result['secret_word']}")
    print(f"Imposters:   {imposters}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    config = load_config(args.config)
    demo = is_demo_mode(args, config)
    # Not an engine setting
    config.pop("demo_mode", None)

    try:
        validate_config(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.check_config:
        print(json.dumps(config, indent=2, sort_keys=True))
        return 0

    if demo:
        return run_demo(args, config)

    # Serving real clients needs a transport, which only Python code can supply
    print("Error: Non-demo mode requires running from Python code.", file=sys.stderr)
    print("Use --demo, or build an EngineRunner with your own transport.", file=sys.stderr)
    return 1
