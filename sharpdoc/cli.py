"""CLI entrypoints for sharpdoc commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .config import ANALYSIS_MODES, ConfigError, SharpDocConfig, load_config
from .engine import AnalysisEngine
from .errors import SharpDocError
from .logging import configure_logging, get_logger
from .models import ApiDocumentation
from .reports import (
    build_readme,
    build_summary,
    render_api_docs,
)
from .toolchain import ensure_registered, toolchain_available

_LOGGER = get_logger("cli")


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


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "path",
        help="Path to the solution (.sln) or project (.csproj) file.",
    )
    parser.add_argument(
        "--mode",
        choices=ANALYSIS_MODES,
        default=None,
        help="Analyzer to use (defaults to the configured mode, normally 'auto').",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .sharpdoc.yml file (defaults to the descriptor's directory).",
    )


def _add_output_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the result to this file instead of standard output.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharpdoc",
        description="Analyze .NET solutions and projects and generate documentation.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Print the analysis result as JSON.",
    )
    _add_common_options(analyze_parser)
    _add_output_option(analyze_parser)

    deps_parser = subparsers.add_parser(
        "deps",
        help="Report package and project references per project.",
    )
    _add_common_options(deps_parser)
    deps_parser.add_argument(
        "--include-transitive",
        action="store_true",
        help="Request transitive dependencies (reported as unresolved).",
    )

    quality_parser = subparsers.add_parser(
        "quality",
        help="Report size metrics and quality recommendations.",
    )
    _add_common_options(quality_parser)

    summary_parser = subparsers.add_parser(
        "summary",
        help="Render a markdown project summary.",
    )
    _add_common_options(summary_parser)
    summary_parser.add_argument(
        "--detailed",
        action="store_true",
        help="Include dependency and code distribution details.",
    )

    docs_parser = subparsers.add_parser(
        "docs",
        help="Extract API documentation from XML doc comments.",
    )
    _add_common_options(docs_parser)
    _add_output_option(docs_parser)
    docs_parser.add_argument(
        "--format",
        default=None,
        help="Output format: 'markdown' or 'json' (anything else renders markdown).",
    )

    readme_parser = subparsers.add_parser(
        "readme",
        help="Generate a README for the project.",
    )
    _add_common_options(readme_parser)
    _add_output_option(readme_parser)
    readme_parser.add_argument(
        "--no-api-docs",
        action="store_true",
        help="Leave the API documentation section out of the README.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sharpdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        config = _load_config(args)
        output = _run_command(args, config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    except SharpDocError as exc:
        parser.exit(1, f"sharpdoc {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    destination = getattr(args, "output", None)
    if destination:
        path = Path(destination)
        path.write_text(output, encoding="utf-8")
        print(f"Output written to {_relativize(path)}")
    else:
        print(output)


def _load_config(args: argparse.Namespace) -> SharpDocConfig:
    if args.config:
        return load_config(Path(args.config))
    return load_config(Path(args.path).expanduser().parent)


def _run_command(args: argparse.Namespace, config: SharpDocConfig) -> str:
    mode = args.mode or config.analysis.mode
    if mode == "semantic" or args.command == "docs":
        ensure_registered()
    elif mode == "auto" and not toolchain_available():
        _LOGGER.info("C# toolchain unavailable; falling back to filesystem analysis")

    engine = AnalysisEngine(config)

    if args.command == "docs":
        docs = engine.extract_api_docs(args.path)
        return render_api_docs(docs, args.format or config.docs.format)

    result = engine.analyze(args.path, mode)
    if args.command == "analyze":
        return result.to_json()
    if args.command == "deps":
        report = engine.dependency_report(
            result, include_transitive=bool(getattr(args, "include_transitive", False))
        )
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    if args.command == "quality":
        return json.dumps(engine.quality_report(result).to_dict(), indent=2, ensure_ascii=False)
    if args.command == "summary":
        return build_summary(result, detailed=bool(getattr(args, "detailed", False)))
    if args.command == "readme":
        include_api = config.docs.include_api_docs and not getattr(args, "no_api_docs", False)
        api_docs = _readme_api_docs(engine, args.path) if include_api else None
        return build_readme(result, api_docs)
    raise SharpDocError(f"Unknown command {args.command}")  # pragma: no cover - argparse enforces choices


def _readme_api_docs(engine: AnalysisEngine, path: str) -> Optional[ApiDocumentation]:
    if not toolchain_available():
        _LOGGER.warning("C# toolchain unavailable; README will not include API documentation")
        return None
    try:
        return engine.extract_api_docs(path)
    except SharpDocError as exc:
        _LOGGER.warning("Skipping API documentation: %s", exc)
        return None


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
