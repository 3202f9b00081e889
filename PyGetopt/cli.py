"""
cli.py
a getopt(1) work-alike for shell scripts: parse parameters against an
option string and print them back in normalised, quoted form.

    eval set -- "$(python -m PyGetopt -o ab:c:: -l alpha,bravo: -- "$@")"
"""
import logging
import os
import sys
from typing import List, Optional

from .exceptions import OptionException
from .getopt import Getopt
from .longopts import ArgRequirement, parse_longopts_string
from .options import Options, flag, value
from .results import Error, Operand
from .shortopts import arg_requirement, spec_index

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_USAGE = 2

def shell_quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"

def build_options() -> Options:
    options = Options("getopt", "Parse command options and print them in canonical form.", strict=True)
    options.add_options()("o,options", "the short options to be recognized", value(str), "optstring")
    options.add_options()("l,longoptions", "the long options to be recognized (comma separated, "
                          "':' for a required and '::' for an optional argument)",
                          value(str, container=True), "longopts")
    options.add_options()("a,alternative", "allow long options starting with a single -")
    options.add_options()("n,name", "the name under which errors are reported", value(str), "progname")
    options.add_options()("q,quiet", "disable error reporting by getopt")
    options.add_options()("Q,quiet-output", "no normal output")
    options.add_options()("u,unquoted", "do not quote the output")
    options.add_options()("h,help", "display this help", flag())
    return options

def normalise(params: List[str], shortopts: str, longopts, name: str = "getopt",
              long_only: bool = False, quiet: bool = False, quote: bool = True):
    """Returns (words, had_errors) for `params` scanned against the option strings."""
    def emit(line: str) -> None:
        print(line, file=sys.stderr)

    session = Getopt(prog=name, sink=emit, opterr=not quiet)
    params = list(params)
    effective = shortopts[1:] if shortopts[:1] in ('+', '-') else shortopts
    quoted = shell_quote if quote else str

    words = []
    operands = []
    had_errors = False
    for result in session.scan(params, shortopts, longopts, long_only=long_only):
        if isinstance(result, Error):
            had_errors = True
            continue
        if isinstance(result, Operand):
            operands.append(result.text)
            continue
        if result.long_index is not None:
            words.append("--" + result.name)
            requirement = longopts[result.long_index].has_arg
        else:
            words.append("-" + result.code)
            requirement = arg_requirement(effective, spec_index(effective, result.code))
        if requirement != ArgRequirement.NO_ARGUMENT:
            words.append(quoted(result.value or ""))

    operands.extend(params[session.cursor:])
    words.append("--")
    words.extend(quoted(operand) for operand in operands)
    return words, had_errors

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=os.environ.get("PYGETOPT_LOG_LEVEL", "WARNING").upper(),
                        format="%(name)s: %(message)s")
    argv = sys.argv[1:] if argv is None else argv
    options = build_options()
    try:
        result = options.parse(argv)
    except OptionException as e:
        print(f"getopt: {e}", file=sys.stderr)
        return EXIT_USAGE

    if "help" in result:
        print(options.help())
        return EXIT_OK

    params = list(result.unmatched)
    shortopts = result["options"]
    if shortopts is None:
        if not params:
            print("getopt: missing optstring argument", file=sys.stderr)
            return EXIT_USAGE
        shortopts = params.pop(0)

    longopts = []
    for item in result["longoptions"]:
        longopts.extend(parse_longopts_string(item))

    words, had_errors = normalise(params, shortopts, longopts,
                                  name=result["name"] or "getopt",
                                  long_only="alternative" in result,
                                  quiet="quiet" in result,
                                  quote="unquoted" not in result)
    if "quiet-output" not in result:
        print(" " + " ".join(words))
    return EXIT_PARSE_ERROR if had_errors else EXIT_OK
