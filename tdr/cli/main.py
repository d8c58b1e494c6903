"""
TDR CLI — Command-line interface for line resolution.
"""

import argparse
import sys

from tdr import __version__
from tdr.core.context import TransformRequest
from tdr.core.engine import Engine, Pipeline, get_engine
from tdr.ir.serialization import to_json
from tdr.passes import (
    apply_case_chains,
    apply_case_modifiers,
    convert_literals,
    convert_pairs,
    fix_articles,
    normalize_punctuation,
    normalize_quotes,
    prepare,
    reduce_bin,
    reduce_hex,
    resolve_chains,
    resolve_nested,
    strip_standalone_markers,
)
from tdr.validate.idempotence import IdempotenceValidator

# Type conversions, then case modifiers, then nested groups
DIRECTIVE_PASSES = [
    prepare,
    convert_pairs,         # 101(bin)(hex)
    convert_literals,      # (hex, 255)
    resolve_chains,        # ff(up)(hex)
    reduce_hex,            # ff(hex), leftover (hex)
    reduce_bin,            # 101(bin), leftover (bin)
    apply_case_modifiers,  # words (up, 2), word(up)
    apply_case_chains,     # word(up)(low)
    resolve_nested,        # (up, 2 words (low, 1 more))
]

SURFACE_PASSES = [
    normalize_punctuation,
    normalize_quotes,
    fix_articles,
]


def setup_default_pipeline(engine: Engine, check_idempotence: bool = False) -> None:
    """Register the default pipeline: every directive pass, then normalization."""
    passes = DIRECTIVE_PASSES + SURFACE_PASSES + [strip_standalone_markers]
    validators = [IdempotenceValidator(passes)] if check_idempotence else []

    engine.register_pipeline(
        Pipeline(
            id="default",
            name="Default TDR Pipeline",
            passes=passes,
            validators=validators,
        )
    )


def setup_directives_pipeline(engine: Engine) -> None:
    """
    Register the directives pipeline: resolution without normalization.

    Punctuation, quotes and articles are left exactly as written.
    Useful for inspecting what the directive passes alone produce.
    """
    engine.register_pipeline(
        Pipeline(
            id="directives",
            name="Directive Resolution Only",
            passes=DIRECTIVE_PASSES + [strip_standalone_markers],
        )
    )


def setup_surface_pipeline(engine: Engine) -> None:
    """Register the surface pipeline: normalization of already-plain text."""
    engine.register_pipeline(
        Pipeline(
            id="surface",
            name="Surface Normalization Only",
            passes=[prepare] + SURFACE_PASSES + [strip_standalone_markers],
        )
    )


def setup_pipelines(engine: Engine, check_idempotence: bool = False) -> None:
    """Register every standard pipeline."""
    setup_default_pipeline(engine, check_idempotence=check_idempotence)
    setup_directives_pipeline(engine)
    setup_surface_pipeline(engine)


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or TDR_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (pipeline,convert,case,normalize,io,system). Default: all",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tdr",
        description="Text Directive Resolver",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tdr {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Process command
    process_parser = subparsers.add_parser("process", help="Resolve every line of a file")
    process_parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Input file (default: sample.txt)",
    )
    process_parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output file (default: result.txt)",
    )
    process_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML settings file",
    )
    process_parser.add_argument(
        "--pipeline",
        type=str,
        default=None,
        help="Pipeline to use: default, directives, surface (default: default)",
    )
    process_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads; output order always follows input order (default: 1)",
    )
    process_parser.add_argument(
        "--trace-out",
        type=str,
        default=None,
        help="Write every line's full result (trace, diagnostics) to this JSON Lines file",
    )
    process_parser.add_argument(
        "--check-idempotence",
        action="store_true",
        help="Re-resolve every output line and warn if it changes",
    )
    _add_logging_arguments(process_parser)

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a single line")
    resolve_parser.add_argument("text", type=str, help="Line to resolve")
    resolve_parser.add_argument(
        "--pipeline",
        type=str,
        default="default",
        help="Pipeline to use (default: default)",
    )
    resolve_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format: text (default) or json (full result with trace)",
    )
    _add_logging_arguments(resolve_parser)

    return parser


def main(argv: list[str] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "process":
        return run_process(args)

    if args.command == "resolve":
        return run_resolve(args)

    return 0


def _channels(args: argparse.Namespace):
    if not args.log_channel:
        return None
    return [ch.strip() for ch in args.log_channel.split(",")]


def run_process(args: argparse.Namespace) -> int:
    """Run the file processing command."""
    from tdr.config.settings import load_settings
    from tdr.core.logging import LogChannel, configure_logging, get_logger
    from tdr.io.lines import process_file

    try:
        settings = load_settings(
            args.config,
            input_path=args.input,
            output_path=args.output,
            pipeline=args.pipeline,
            workers=args.workers,
            trace_path=args.trace_out,
            log_level=args.log_level,
            log_channels=_channels(args),
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(
        level=settings.log_level,
        format=settings.log_format,
        channels=settings.log_channels,
        force=True,
    )
    log = get_logger(LogChannel.SYSTEM)

    engine = get_engine()
    setup_pipelines(engine, check_idempotence=args.check_idempotence)

    if settings.pipeline not in engine.list_pipelines():
        print(
            f"Error: unknown pipeline '{settings.pipeline}' "
            f"(available: {', '.join(engine.list_pipelines())})",
            file=sys.stderr,
        )
        return 2

    try:
        process_file(
            settings.input_path,
            settings.output_path,
            engine,
            pipeline_id=settings.pipeline,
            workers=settings.workers,
            create_missing=settings.create_missing,
            trace_path=settings.trace_path,
        )
    except (OSError, ValueError) as e:
        log.error("io_failed", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Successfully processed {settings.input_path} and saved to {settings.output_path}")
    return 0


def run_resolve(args: argparse.Namespace) -> int:
    """Resolve one line and print it."""
    from tdr.core.logging import configure_logging

    configure_logging(level=args.log_level, channels=_channels(args), force=True)

    engine = get_engine()
    setup_pipelines(engine)

    result = engine.transform(TransformRequest(text=args.text), args.pipeline)

    if args.format == "json":
        print(to_json(result))
    else:
        print(result.rendered_text or "")
        for diag in result.diagnostics:
            print(f"[{diag.level.value}] {diag.code}: {diag.message}", file=sys.stderr)

    return 0 if result.status.value in ("success", "partial") else 1


if __name__ == "__main__":
    sys.exit(main())
