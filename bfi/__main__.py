"""CLI entry point for the bf interpreter.

Usage:
    python -m bfi [-v|-vv|-vvv] [-m MEMORY] <program_file>
    python -m bfi [-v...] [-m MEMORY]
    python -m bfi --emit-ops <program_file>
    python -m bfi [-v...] [-m MEMORY] --ops <ops_json_file>

Options:
  -m MEMORY     Tape capacity in cells (default 2000)
  -v            Increase debug verbosity (can be repeated)
  --emit-ops    Parse the given program and write its operations as JSON
  --ops         Execute a previously emitted operations JSON file

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
from pathlib import Path

from .errors import Fault, fail, report, warn
from .interpreter import DEFAULT_MEMORY, run
from .ops_json import program_from_obj, program_to_obj
from .parser import parse_program
from .repl import Repl


def memory_value(text: str) -> int:
    if not text.isdigit():
        raise argparse.ArgumentTypeError('-m flag value must be an integer')
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError('-m flag value must be positive')
    return value


def read_to_string(path: Path) -> str:
    try:
        # latin-1 keeps one character per byte so positions are byte offsets
        return path.read_text(encoding='latin-1')
    except OSError:
        fail(f"couldn't open file {path}.")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='bf', description="Tape language interpreter")
    parser.add_argument('-m', '--memory', type=memory_value, default=DEFAULT_MEMORY,
                        help=f'tape capacity in cells (default {DEFAULT_MEMORY})')
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ops', metavar='BF_FILE', help='emit operations JSON for the given program')
    group.add_argument('--ops', metavar='OPS_JSON_FILE', help='execute operations from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute')
    args = parser.parse_args(argv)

    if args.memory < DEFAULT_MEMORY:
        warn("memory capacity is set to less than 2KB. It may cause unexpected memory overflow")

    try:
        # Emit operations mode
        if args.emit_ops:
            program_file = Path(args.emit_ops)
            program = parse_program(read_to_string(program_file))
            out_path = program_file.with_name(program_file.name + '.ops.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(program_to_obj(program), out, indent=2)
            print(str(out_path))
            return

        # Execute from operations JSON
        if args.ops:
            ops_path = Path(args.ops)
            try:
                data = json.loads(read_to_string(ops_path))
                program = program_from_obj(data)
            except ValueError as e:
                fail(f"invalid operations file {ops_path}: {e}")
            run(program, interactive=False, capacity=args.memory, debug_level=args.v)
            return

        # No program: interactive session
        if not args.program:
            Repl(args.memory, debug_level=args.v).run()
            return

        program = parse_program(read_to_string(Path(args.program)))
        run(program, interactive=False, capacity=args.memory, debug_level=args.v)
    except Fault as e:
        report(e, interactive=False)


if __name__ == '__main__':
    main()
