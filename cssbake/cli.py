"""Command-line entry point: ESTree JSON in, JavaScript (or JSON) out."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass

from .emit import emit_js
from .errors import CssbakeError
from .estree import dump, load
from .options import LABEL_MODES, Options
from .plugin import transform_program

log = logging.getLogger(__name__)

FORMATS: list[str] = ["js", "json"]

USAGE: str = """\
cssbake [OPTIONS] [INPUT] [-o OUTPUT]

Rewrites css/keyframes style invocations in an ESTree JSON syntax tree.

Options:
  --auto-label MODE    Label mode: never, dev-only (default), always
  --label-format FMT   Label format, default [local]; also [filename], [dirname]
  --no-source-map      Do not emit source map diagnostics
  --filename NAME      Source file name, for labels and source maps
  --source FILE        Original source text, embedded in source maps
  --format FORMAT      Output format: js (default), json
  --verbose            Report each transformed invocation on stderr
  -o, --output FILE    Write output to FILE instead of stdout
  --help               Show this help message
"""


@dataclass
class CliArgs:
    auto_label: str = "dev-only"
    label_format: str = "[local]"
    source_map: bool = True
    filename: str = ""
    source_file: str | None = None
    output_format: str = "js"
    verbose: bool = False
    input_file: str | None = None
    output_file: str | None = None


def _usage_error(message: str) -> None:
    print("error: " + message, file=sys.stderr)
    sys.exit(2)


def parse_args(argv: list[str]) -> CliArgs:
    """Parse command-line arguments; exits 2 on usage errors."""
    args = CliArgs()
    value_flags = {
        "--auto-label": "auto_label",
        "--label-format": "label_format",
        "--filename": "filename",
        "--source": "source_file",
        "--format": "output_format",
        "-o": "output_file",
        "--output": "output_file",
    }
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg in value_flags:
            if i + 1 >= len(argv):
                _usage_error(arg + " requires an argument")
            setattr(args, value_flags[arg], argv[i + 1])
            i += 2
        elif arg == "--no-source-map":
            args.source_map = False
            i += 1
        elif arg == "--verbose":
            args.verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            _usage_error("unknown flag '" + arg + "'")
        else:
            if args.input_file is not None:
                _usage_error("unexpected argument '" + arg + "'")
            args.input_file = arg
            i += 1
    if args.auto_label not in LABEL_MODES:
        _usage_error("invalid auto-label '" + args.auto_label + "'")
    if args.output_format not in FORMATS:
        _usage_error("invalid format '" + args.output_format + "'")
    return args


def read_text(path: str | None) -> tuple[str, int]:
    """Read a file, or stdin for None/"-". Returns (text, exit_code)."""
    if path is None or path == "-":
        raw = sys.stdin.buffer.read()
    else:
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + path + "'", file=sys.stderr)
            return ("", 1)
    try:
        return (raw.decode("utf-8"), 0)
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w") as f:
                f.write(output + "\n")
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    print(output)
    return 0


def run(args: CliArgs) -> int:
    text, err = read_text(args.input_file)
    if err != 0:
        return err
    if len(text.strip()) == 0:
        print("error: no input provided", file=sys.stderr)
        return 2
    source: str | None = None
    if args.source_file is not None:
        source, err = read_text(args.source_file)
        if err != 0:
            return err
    filename = args.filename
    if not filename and args.source_file is not None:
        filename = args.source_file
    try:
        raw = json.loads(text)
    except ValueError as e:
        print(f"error: invalid JSON: {e}", file=sys.stderr)
        return 1
    try:
        options = Options(
            auto_label=args.auto_label,  # type: ignore[arg-type]
            label_format=args.label_format,
            source_map=args.source_map,
            filename=filename,
            source=source,
        )
        program = load(raw)
        result = transform_program(program, options)
        if args.output_format == "json":
            output = json.dumps(dump(result.program), indent=2, ensure_ascii=False)
        else:
            output = emit_js(result.program)
    except CssbakeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    for record in result.records:
        where = f"{record.loc.line}:{record.loc.col}" if record.loc is not None else "?"
        path = "folded" if record.folded else "kept"
        log.info("%s:%s %s%s", filename or "<input>", where, path, " (pure)" if record.pure else "")
    return write_output(output, args.output_file)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
