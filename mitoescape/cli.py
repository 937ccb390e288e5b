"""
Mitoescape CLI - Text front end for the engine.

Usage:
    mitoescape play [--seed N]                    Play interactively
    mitoescape simulate [--runs N] [--policy P]   Autoplay and summarize
    mitoescape rooms                              List the compartments
"""

import argparse
import logging
import sys

from .config import load_config
from .engine_core.derived import evaluate
from .engine_core.errors import EngineContractError
from .engine_core.rooms import ROOMS, available_reactions, room_locked, room_status
from .engine_core.state import Room
from .session import TurnController


PLAY_HELP = """Commands:
  room <id>        move to cytosol | matrix | imm | nucleus
  do <reaction>    glycolysis, lactate_route, glycogenolysis, pdh, tca,
                   etc, oxygen_rescue, attempt_escape
  end              end the turn and draw an event
  status           show the dashboard
  log              show the last log lines
  reset            start over
  quit             leave"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Escape the Mitochondrion - metabolic escape room",
        prog="mitoescape",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play interactively")
    play_parser.add_argument("--seed", type=int, help="Seed for the event deck")

    simulate_parser = subparsers.add_parser("simulate", help="Autoplay runs and summarize")
    simulate_parser.add_argument("--runs", type=int, default=100, help="Number of runs")
    simulate_parser.add_argument(
        "--policy", choices=["greedy", "random"], default="greedy", help="Autoplay policy"
    )
    simulate_parser.add_argument("--seed", type=int, default=0, help="Base seed")

    subparsers.add_parser("rooms", help="List the compartments")

    args = parser.parse_args(argv)
    config = load_config(seed=getattr(args, "seed", None))
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args, config)
    elif args.command == "simulate":
        cmd_simulate(args, config)
    elif args.command == "rooms":
        cmd_rooms(args)
    else:
        parser.print_help()
        sys.exit(1)


def render_status(controller: TurnController) -> str:
    """Dashboard text for the current snapshot."""
    s = controller.state
    derived = evaluate(s)
    lines = [
        f"Turn {s.turn}/{s.max_turns}  Actions {s.actions_left}  "
        f"Flags {s.failure_flags}/3  [{s.status.value.upper()}]",
        f"Room: {ROOMS[s.active_room].name}",
        "ATP {atp}  NAD⁺ {nad}  NADH {nadh}  FADH₂ {fadh2}  O₂ {o2}".format(**s.resources()),
        "Glucose {glucose}  Glycogen {glycogen}  Lactate {lactate}  "
        "Acetyl-CoA {acetyl_coa}".format(**s.resources()),
        "Locks: " + "  ".join(
            f"{name}={'open' if value else 'shut'}" for name, value in vars(s.locks).items()
        ),
    ]
    active = s.flags.active()
    if active:
        lines.append("Conditions: " + ", ".join(active))
    lines.extend(f"! {warning}" for warning in derived.warnings)
    lines.append("Map: " + "  ".join(
        f"{room.value}({'locked' if room_locked(s, room) else room_status(s, room)})"
        for room in Room
    ))
    offered = available_reactions(s)
    if offered:
        lines.append("Offered: " + ", ".join(kind.value for kind in offered))
    return "\n".join(lines)


def run_command(controller: TurnController, line: str) -> str | None:
    """
    Execute one line of play input.

    Returns text to print, or None when the player quits.
    """
    parts = line.strip().split()
    if not parts:
        return ""
    command, rest = parts[0].lower(), parts[1:]

    if command in ("quit", "exit", "q"):
        return None
    if command in ("help", "?"):
        return PLAY_HELP
    if command == "status":
        return render_status(controller)
    if command == "log":
        return "\n".join(reversed(controller.log[:10]))

    before = controller.entries_written
    try:
        if command == "room" and rest:
            controller.select_room(rest[0])
        elif command == "do" and rest:
            controller.perform_reaction("_".join(rest))
        elif command == "end":
            controller.advance_turn()
        elif command == "reset":
            controller.reset()
            return render_status(controller)
        else:
            return f"Unknown command: {line.strip()}\n{PLAY_HELP}"
    except EngineContractError as e:
        return f"Error: {e}"

    new_lines = controller.log[:controller.entries_written - before]
    if not new_lines:
        return "Nothing happened (no actions left - end the turn)."
    return "\n".join(reversed(new_lines))


def cmd_play(args, config):
    """Interactive play loop."""
    controller = TurnController(config=config)
    print(controller.log[0])
    print(PLAY_HELP)
    print(render_status(controller))

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        output = run_command(controller, line)
        if output is None:
            break
        if output:
            print(output)
        if controller.state.is_over:
            print(render_status(controller))
            print("Type 'reset' to play again or 'quit' to leave.")


def cmd_simulate(args, config):
    """Autoplay runs and print an outcome summary."""
    from .bots import GreedyPolicy, RandomPolicy, run_episode
    from .engine_core.events import SeededRandom

    escaped = 0
    turns_to_escape = []
    for i in range(args.runs):
        seed = args.seed + i
        controller = TurnController(config=config, random_source=SeededRandom(seed))
        policy = RandomPolicy(seed) if args.policy == "random" else GreedyPolicy()
        result = run_episode(controller, policy)
        if result.escaped:
            escaped += 1
            turns_to_escape.append(result.turns)

    print(f"Policy: {args.policy}")
    print(f"Runs: {args.runs}")
    print(f"Escaped: {escaped} ({escaped / max(args.runs, 1):.0%})")
    if turns_to_escape:
        print(f"Mean turn of escape: {sum(turns_to_escape) / len(turns_to_escape):.1f}")


def cmd_rooms(args):
    """Print the room catalogue."""
    for room, info in ROOMS.items():
        print(f"{room.value:8} {info.name} - {info.subtitle}")
        print(f"         {info.hint}")
        print(f"         Reactions: {', '.join(k.value for k in info.reactions)}")


if __name__ == "__main__":
    main()
