"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, load_config
from .errors import ConfigError, InvalidInputError, UpstreamError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Generate a README.md for a public GitHub repository.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Fetch repository metadata and write a README.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("url", help="GitHub repository URL, e.g. https://github.com/owner/repo")
    generate_parser.add_argument(
        "--no-tree",
        dest="include_tree",
        action="store_false",
        default=None,
        help="Omit the folder structure section.",
    )
    generate_parser.add_argument(
        "--no-ai",
        dest="use_ai",
        action="store_false",
        default=None,
        help="Skip AI enhancement even when a relay is configured.",
    )
    output = generate_parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o",
        "--output",
        default="README.md",
        help="Where to write the README (defaults to ./README.md).",
    )
    output.add_argument(
        "--stdout",
        action="store_true",
        help="Print the README instead of writing a file.",
    )
    generate_parser.add_argument(
        "--config",
        default=".",
        help=f"Path to {CONFIG_FILENAME} or the directory containing it.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the LLM relay endpoint.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate":
        configure_logging(verbose=bool(args.verbose), quiet=bool(args.stdout))
        _run_generate(parser, args)
    elif args.command == "serve":
        configure_logging(verbose=bool(args.verbose))
        from .relay.app import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    include_tree = config.generation.include_tree if args.include_tree is None else args.include_tree
    use_ai = config.generation.use_ai if args.use_ai is None else args.use_ai

    orchestrator = Orchestrator(config)
    try:
        result = orchestrator.generate(args.url, include_tree=include_tree, use_ai=use_ai)
    except InvalidInputError as exc:
        parser.exit(1, f"{exc}\n")
    except UpstreamError as exc:
        parser.exit(1, f"{exc.user_message()}\n")
    except Exception as exc:  # pragma: no cover - defensive guard
        parser.exit(1, f"readmegen generate failed: {exc}\nRun with --verbose for more details.\n")

    if args.stdout:
        sys.stdout.write(result.markdown)
        return

    target = Path(args.output).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.markdown, encoding="utf-8")
    suffix = " (AI enhanced)" if result.used_ai else ""
    print(f"README written to {_relativize(target)}{suffix}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
