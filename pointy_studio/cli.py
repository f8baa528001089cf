import sys
import typing
import logging
import argparse

from .exceptions import InvalidPipelineDocument
from .models import PipelineDocument
from .parser import PointyParser, validate_code
from .translator import compile_pointy, generate_dot_from_document

logger = logging.getLogger("pointy_studio")


cmd_parser = argparse.ArgumentParser(
    prog="pointy-studio",
    description="Convert pipelines between interchange JSON and pointy text",
    add_help=True,
)
cmd_parser.add_argument(
    "-v", "--verbose", action="store_true", default=False, help="Enable debug logging"
)
subparsers = cmd_parser.add_subparsers(dest="command", required=True)

validate_cmd = subparsers.add_parser("validate", help="Lint a file of event code")
validate_cmd.add_argument("file", type=str, help="Python code file to check")

compile_cmd = subparsers.add_parser("compile", help="Write pointy text from JSON")
compile_cmd.add_argument("file", type=str, help="Pipeline interchange JSON file")
compile_cmd.add_argument(
    "-o", "--output_file", type=str, default=None, help="The output file path"
)

parse_cmd = subparsers.add_parser("parse", help="Write JSON from pointy text")
parse_cmd.add_argument("file", type=str, help="Pointy file")
parse_cmd.add_argument(
    "-o", "--output_file", type=str, default=None, help="The output file path"
)
parse_cmd.add_argument(
    "--strict",
    action="store_true",
    default=False,
    help="Keep the first of two events sharing a name instead of the last",
)
parse_cmd.add_argument(
    "--config",
    type=str,
    default=None,
    help="Interchange JSON file whose pipeline config is copied to the output",
)

dot_cmd = subparsers.add_parser("dot", help="Write a graphviz DOT preview from JSON")
dot_cmd.add_argument("file", type=str, help="Pipeline interchange JSON file")
dot_cmd.add_argument(
    "-o", "--output_file", type=str, default=None, help="The output file path"
)


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write(text: str, path: typing.Optional[str]):
    if path is None:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Wrote {path}")


def run_validate(args) -> int:
    warnings = validate_code(_read(args.file))
    for warning in warnings:
        print(f"{args.file}: {warning}")
    return 1 if warnings else 0


def run_compile(args) -> int:
    document = PipelineDocument.from_json(_read(args.file))
    _write(compile_pointy(document), args.output_file)
    return 0


def run_parse(args) -> int:
    result = PointyParser(strict=args.strict).parse(_read(args.file))
    for diagnostic in result.diagnostics:
        logger.warning(f"{args.file}: {diagnostic}")

    config = None
    if args.config:
        config = PipelineDocument.from_json(_read(args.config)).config
    document = result.document.with_config(config)
    _write(document.as_json(indent=2), args.output_file)
    return 0


def run_dot(args) -> int:
    document = PipelineDocument.from_json(_read(args.file))
    _write(generate_dot_from_document(document), args.output_file)
    return 0


COMMANDS = {
    "validate": run_validate,
    "compile": run_compile,
    "parse": run_parse,
    "dot": run_dot,
}


def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    args = cmd_parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except InvalidPipelineDocument as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
