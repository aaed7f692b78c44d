"""
Command Console

Drives a container from JSON lines, one command object per line, and
writes the resulting state snapshot after each command:

    $ echo '{"command": "addTab", "cluster": "prod"}' | python -m panegrid
"""

from __future__ import annotations
import json
import logging
import sys
from typing import IO, Optional

from .config import ContainerConfig
from .container import ContainerStateMachine


class Console:
    """Reads commands from a stream and echoes state snapshots."""

    def __init__(self, machine: ContainerStateMachine):
        self.machine = machine

    def handle_line(self, line: str) -> Optional[dict]:
        """
        Run one JSON command line.

        Returns:
            Response dict, or None for blank lines
        """
        line = line.strip()
        if not line:
            return None

        try:
            command = json.loads(line)
        except json.JSONDecodeError as e:
            return {"success": False, "error": f"Invalid JSON: {e}"}

        state = self.machine.execute(command)
        error = self.machine.last_error
        if error is not None:
            return {
                "success": False,
                "error": f"{error.kind}: {error}",
                "state": state.to_dict(),
            }
        return {"success": True, "state": state.to_dict()}

    def run(self, source: IO[str], sink: IO[str]) -> int:
        for line in source:
            response = self.handle_line(line)
            if response is None:
                continue
            sink.write(json.dumps(response) + "\n")
            sink.flush()
        return 0


def main():
    """Main entry point."""
    try:
        config = ContainerConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.debug_events else logging.WARNING,
        format="[%(name)s] %(message)s",
        stream=sys.stderr,
    )

    console = Console(ContainerStateMachine(config))
    try:
        return console.run(sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        return 0
