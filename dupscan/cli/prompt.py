# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Interactive query loop shown after a scan.

Three single-character commands:
  s  search duplicates by name
  a  print every group in the table
  q  quit

Only the first non-blank character of a line counts as the command. Anything
else is ignored and the menu is shown again. End of input behaves like q, so
piping a file of commands in terminates cleanly.
"""

from typing import Optional, TextIO

from dupscan.index.table import DuplicateIndex
from dupscan.scan.report import write_all_groups, write_search

PROGRAM_NAME = "dupscan"

COMMAND_SEARCH = "s"
COMMAND_ALL = "a"
COMMAND_QUIT = "q"

MENU = (
    "\n- Search duplicates by name: s\n"
    "- Print file table contents: a\n"
    "- Quit (cleanly)           : q\n"
)


def _read_command(stdin: TextIO) -> Optional[tuple[str, str]]:
    """Return (command, rest_of_line) for the next non-blank line, or None at EOF."""
    for line in stdin:
        stripped = line.strip()
        if stripped:
            return stripped[0], stripped[1:].strip()
    return None


def _read_name(rest: str, stdin: TextIO, stdout: TextIO, max_name_length: int) -> Optional[str]:
    """
    Take the name token from the rest of the command line, or prompt for it.

    Only the first whitespace-separated token is used, truncated to
    max_name_length characters.
    """
    token = rest.split()[0] if rest else ""
    while not token:
        stdout.write("\nName: ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            return None
        parts = line.split()
        token = parts[0] if parts else ""
    return token[:max_name_length]


def run_prompt(
    index: DuplicateIndex,
    stdin: TextIO,
    stdout: TextIO,
    max_name_length: int,
) -> None:
    """Run the menu loop until the user quits or input ends."""
    while True:
        stdout.write(f"{PROGRAM_NAME}:{MENU}")
        stdout.flush()

        parsed = _read_command(stdin)
        if parsed is None:
            return
        command, rest = parsed

        if command == COMMAND_QUIT:
            return

        if command == COMMAND_ALL:
            write_all_groups(index, stdout)
        elif command == COMMAND_SEARCH:
            name = _read_name(rest, stdin, stdout, max_name_length)
            if name is None:
                return
            stdout.write(f"\nSearching for {name}\n")
            write_search(index, name, stdout)
