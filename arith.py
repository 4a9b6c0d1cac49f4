"""
ARITH - Main Entry Point
Reads one line of source, then scans, parses or runs it
"""

import sys
import argparse
from typing import List, Optional

from environment import DEFAULT_MAX_VARIABLES
from error_handling import ArithError, ArithRuntimeError, describe_error
from interpreter import create_debug_interpreter, create_interpreter
from parsing import create_debug_parser, create_parser
from scanner import format_token, tokenize
from syntax import pretty_print_ast


VERSION = "0.1.0"
MAX_INPUT_LENGTH = 4096  # characters per input line, newline included
PROMPT = "Enter a line of code (e.g., 'x = 1 + 2 * 3; print x;'):"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='arith',
      description='ARITH - a line-oriented arithmetic scripting language',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s -c "x = 1 + 2 * 3; print x;"   # Run a program
  echo "print (2 + 3) * 4;" | %(prog)s     # Read the program from stdin
  %(prog)s --tokens -c "print x;"          # Show the token stream
  %(prog)s --parse -c "print x;"           # Show the syntax tree
        """
  )

  parser.add_argument(
      '-c', '--command',
      metavar='SOURCE',
      help='Program text to run (default: read one line from stdin)'
  )

  mode = parser.add_mutually_exclusive_group()
  mode.add_argument(
      '--tokens',
      action='store_true',
      help='Scan the input and show its tokens'
  )
  mode.add_argument(
      '--parse',
      action='store_true',
      help='Parse the input and show the syntax tree'
  )

  parser.add_argument(
      '--max-variables',
      type=int,
      default=DEFAULT_MAX_VARIABLES,
      metavar='N',
      help=f'Maximum number of distinct variables (default: {DEFAULT_MAX_VARIABLES})'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=f'ARITH v{VERSION}'
  )

  return parser


def read_source() -> Optional[str]:
  """Read a single line of source from stdin; None when nothing could be read"""
  if sys.stdin.isatty():
    print(PROMPT)

  source = sys.stdin.readline(MAX_INPUT_LENGTH - 1)
  if not source:
    return None
  # End-of-input errors then point at the typed line
  return source.rstrip("\r\n")


def show_tokens(source: str) -> None:
  for token in tokenize(source):
    print(format_token(token))


def show_tree(source: str, debug: bool = False) -> None:
  """Parse source and print each statement's syntax tree"""
  parser = create_debug_parser() if debug else create_parser()
  for stmt in parser.parse_string(source):
    print(pretty_print_ast(stmt), end='')


def run_source(source: str, debug: bool = False, max_variables: int = DEFAULT_MAX_VARIABLES) -> None:
  """Run source, printing every output line; partial output survives an error"""
  if debug:
    interpreter = create_debug_interpreter(max_variables)
  else:
    interpreter = create_interpreter(max_variables=max_variables)

  try:
    output = interpreter.run(source)
  except ArithError as e:
    for text in e.output:
      print(text)
    raise

  for text in output:
    print(text)


def report_error(error: ArithError, source: str, debug: bool = False) -> None:
  print(describe_error(error, source), file=sys.stderr)

  if debug and isinstance(error, ArithRuntimeError):
    print("\nEnvironment at error:", file=sys.stderr)
    if error.env_snapshot:
      for name, value in error.env_snapshot.items():
        print(f"  {name} = {value}", file=sys.stderr)
    else:
      print("  (no bindings)", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for ARITH"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.max_variables < 1:
    arg_parser.error("--max-variables must be at least 1")

  source = args.command if args.command is not None else read_source()
  if source is None:
    print("Error reading input.", file=sys.stderr)
    sys.exit(1)

  try:
    if args.tokens:
      show_tokens(source)
    elif args.parse:
      show_tree(source, debug=args.debug)
    else:
      run_source(source, debug=args.debug, max_variables=args.max_variables)
  except ArithError as e:
    report_error(e, source, debug=args.debug)
    sys.exit(1)


if __name__ == "__main__":
  main()
