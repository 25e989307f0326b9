# Area: CLI
"""
rps_lobby.cli — Command-line interface
======================================

Usage:
    rps-lobby serve                               # Run the lobby server
    rps-lobby serve --config server.json --port 9000
    rps-lobby play --ais 2                        # Play locally vs 2 AIs
    rps-lobby play --rules fire.json --rule "Water beats Fire"

Server settings can also come from environment variables (RPS_HOST,
RPS_PORT, RPS_LOG_FILE, RPS_LOG_LEVEL) or a .env file.
"""

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import load_dotenv

from ._server_config import load_config, validate_config
from ._shared import setup_logging
from .errors import InvalidRuleError
from .local_game import LocalGame
from .players import AiPlayer, InteractivePlayer, Player
from .rules import RuleGraph, parse_rule

MAX_AIS = 5


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="rps-lobby",
        description="Rock-Paper-Scissors-style games with custom rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rps-lobby serve --port 8080
  rps-lobby play --name Zach --ais 3
  rps-lobby play --rules fire.json --rule "Water beats Fire"
        """,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the multiplayer lobby server")
    serve.add_argument("--config", type=str, help="Path to JSON config file")
    serve.add_argument("--host", type=str, help="Interface to bind")
    serve.add_argument("--port", type=int, help="Port to listen on")
    serve.add_argument("--log-file", type=str, help="Path to the JSON log file")
    serve.add_argument("--log-level", type=str, help="DEBUG, INFO, WARNING, ...")

    play = sub.add_parser("play", help="Play a local game against AI players")
    play.add_argument("--name", type=str, help="Your player name")
    play.add_argument("--ais", type=int, default=1,
                      help=f"Number of AI players (1-{MAX_AIS})")
    play.add_argument("--rules", type=str,
                      help="Path to a JSON rules file (default: classic RPS)")
    play.add_argument("--rule", action="append", default=[], metavar="'X beats Y'",
                      help="Extra rule, may be repeated")
    play.add_argument("--seed", type=int, help="Seed for the AI players")

    return parser.parse_args(argv)


def load_rules(path: Optional[str], extra: List[str]) -> RuleGraph:
    """
    Load rules from a JSON file (classic RPS if no path) plus extra rules.

    Raises:
        InvalidRuleError: If the file or an extra rule is invalid
        OSError: If the file cannot be read
    """
    if path:
        try:
            rules = RuleGraph.from_json(Path(path).read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidRuleError(f"{path} is not UTF-8 text ({e.reason})")
        except json.JSONDecodeError as e:
            raise InvalidRuleError(f"{path} is not valid JSON ({e})")
    else:
        rules = RuleGraph.classic()

    for text in extra:
        rule = parse_rule(text)
        rules.add_rule(rule.beater, rule.beaten)
    return rules


def build_players(name: str, ai_count: int, rules: RuleGraph,
                  seed: Optional[int] = None,
                  input_fn: Callable[[str], str] = input) -> List[Player]:
    """One interactive player followed by ``ai_count`` AI players."""
    if not 1 <= ai_count <= MAX_AIS:
        raise ValueError(f"Number of AIs must be between 1 and {MAX_AIS}")
    rng = random.Random(seed)
    players: List[Player] = [InteractivePlayer(name, rules, input_fn=input_fn)]
    players.extend(AiPlayer(i, rules, rng=rng) for i in range(1, ai_count + 1))
    return players


def run_serve(args: argparse.Namespace) -> int:
    load_dotenv()
    try:
        config = load_config(args.config)
        overrides = {
            "host": args.host,
            "port": args.port,
            "log_file": args.log_file,
            "log_level": args.log_level,
        }
        config.update({k: v for k, v in overrides.items() if v is not None})
        validate_config(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(log_file_path=config.get("log_file"),
                  level=config.get("log_level", "INFO"))

    # Imported here so `play` works without loading the web stack
    from .server import run_server
    run_server(config)
    return 0


def run_play(args: argparse.Namespace,
             input_fn: Callable[[str], str] = input) -> int:
    try:
        rules = load_rules(args.rules, args.rule)
    except (InvalidRuleError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if len(rules) < 2:
        print("Error: the rules need at least two choices", file=sys.stderr)
        return 1

    name = args.name
    while not name:
        name = input_fn("What is your name? ").strip()

    try:
        players = build_players(name, args.ais, rules, seed=args.seed,
                                input_fn=input_fn)
        game = LocalGame(rules, players)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    def ask_again() -> bool:
        answer = input_fn("Play Again? ").strip().lower()
        return answer.startswith("y")

    game.run(ask_again)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    if args.command == "serve":
        return run_serve(args)
    return run_play(args)


if __name__ == "__main__":
    sys.exit(main())
