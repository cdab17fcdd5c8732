"""Replay bot that plays a recorded move string via the REST API.

Starts a session, sends each move in order, and prints what happened.
Moves are letters: U/D/L/R (case-insensitive). Anything else is skipped.

Usage:
    1. Start the server:  uvicorn main:app --reload
    2. Run this bot:      python bots/replay_bot.py --name Robo RRDDL

Environment variables:
    BOXPUSHER_URL  - Server URL (default: http://127.0.0.1:8000)
"""

import argparse
import os
import sys

import httpx

DEFAULT_URL = os.environ.get("BOXPUSHER_URL", "http://127.0.0.1:8000")

MOVE_LETTERS = {"u": "up", "d": "down", "l": "left", "r": "right"}


def parse_moves(text: str) -> list[str]:
    """Turn a move string like 'RRdL' into direction names."""
    return [MOVE_LETTERS[ch] for ch in text.lower() if ch in MOVE_LETTERS]


def replay(client: httpx.Client, player_name: str, moves: list[str]) -> dict:
    """Start a session and play *moves*, returning the final session view."""
    resp = client.post("/session", json={"player_name": player_name})
    if resp.status_code != 200:
        detail = resp.json().get("detail", resp.text)
        print(f"Could not start a session: {detail}", file=sys.stderr)
        sys.exit(1)
    state = resp.json()
    print(f"Playing as {state['player_name']}, level {state['level_number']}")

    for direction in moves:
        resp = client.post("/session/move", json={"direction": direction})
        if resp.status_code == 409:
            print("  Session finished, remaining moves ignored")
            break
        resp.raise_for_status()
        report = resp.json()
        print(
            f"  {direction:<5} -> {report['result']:<8} "
            f"steps={report['step_count']}"
        )
        if report["solved"]:
            print(
                f"  *** Level {report['level_number']} solved in "
                f"{report['step_count']} steps ***"
            )

    resp = client.get("/session")
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay moves against the server")
    parser.add_argument("moves", help="Move string, e.g. RRDDL")
    parser.add_argument("--name", default="ReplayBot", help="Player name")
    parser.add_argument(
        "--url",
        default=DEFAULT_URL,
        help=f"Server URL (default: {DEFAULT_URL}, or set BOXPUSHER_URL env var)",
    )
    args = parser.parse_args()

    client = httpx.Client(base_url=args.url, timeout=10.0)
    try:
        final = replay(client, args.name, parse_moves(args.moves))
    except httpx.ConnectError:
        print(f"Error: Could not connect to server at {args.url}", file=sys.stderr)
        print("Is the server running?", file=sys.stderr)
        sys.exit(1)
    finally:
        client.close()

    print(
        f"\nStatus: {final['status']} | "
        f"Levels completed: {final['levels_completed']}/{final['level_count']}"
    )


if __name__ == "__main__":
    main()
