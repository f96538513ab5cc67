"""Entry point for running the AI Code Reviewer from a terminal.

This module handles:
- Configuration loading
- Logging setup with secret sanitization
- Reading the snippet from a file or stdin
- Running one review and optionally applying its fixes and suggestions
- Printing the editor and explanation views
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from ai_code_reviewer._version import __version__

log = structlog.get_logger()


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging before the config file is read.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from ai_code_reviewer.utils.logging import LogFormat, LogLevel, configure_logging

    configure_logging(
        level=LogLevel.DEBUG if debug else LogLevel.WARNING,
        log_format=LogFormat(log_format.lower()),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="ai-code-reviewer",
        description="AI Code Reviewer - line-by-line review of a code snippet",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: environment only)",
    )

    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="File containing the code to review (default: read stdin)",
    )

    parser.add_argument(
        "-l",
        "--language",
        default=None,
        help="Language id of the snippet (see --list-languages)",
    )

    parser.add_argument(
        "--apply-fixes",
        action="store_true",
        help="Apply every suggested fix after the review",
    )

    parser.add_argument(
        "--apply-suggestions",
        action="store_true",
        help="Apply every suggestion on lines without errors after the review",
    )

    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the configuration without reviewing anything",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def read_source(path: Path | None) -> str:
    """Read the snippet from a file, or from stdin when no path is given."""
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8", errors="replace")


async def run_review(args: argparse.Namespace) -> int:
    """Run one review session.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from ai_code_reviewer.config.loader import load_config
    from ai_code_reviewer.core.presentation import editor_view, explanation_view
    from ai_code_reviewer.core.session import create_session
    from ai_code_reviewer.ui.console import render_editor, render_explanation
    from ai_code_reviewer.utils.errors import ReviewerError
    from ai_code_reviewer.utils.logging import bind_context, configure_logging
    from ai_code_reviewer.utils.security import mask_config_value

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return 1
    except ValueError as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    configure_logging(
        level="DEBUG" if args.debug else config.logging.level,
        log_format=config.logging.format,
        file_path=config.logging.file.path if config.logging.file.enabled else None,
        file_enabled=config.logging.file.enabled,
    )
    bind_context(source=str(args.file) if args.file else "stdin")

    if args.dry_run:
        anthropic_config = config.llm.anthropic
        log.info("dry_run_mode_config_valid", provider=config.llm.provider)
        if anthropic_config:
            masked_key = mask_config_value("api_key", anthropic_config.api_key)
            print(f"configuration valid: model={anthropic_config.model} api_key={masked_key}")
        return 0

    try:
        source_text = read_source(args.file)
    except OSError as e:
        log.error("source_read_failed", path=str(args.file), error=str(e))
        return 1

    try:
        session = create_session(config)
        if args.language:
            session.set_language(args.language)
    except (ValueError, ReviewerError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    session.set_source_text(source_text)
    state = await session.request_review()

    if state.error:
        print(render_explanation(explanation_view(state)), file=sys.stderr)
        return 1

    print(render_editor(editor_view(state)))
    print()
    print(render_explanation(explanation_view(state)))

    if not (args.apply_fixes or args.apply_suggestions) or state.result is None:
        return 0

    result = state.result
    if args.apply_fixes:
        for error in result.open_errors:
            try:
                session.apply_fix(error.line_number, error.suggested_fix)
            except ReviewerError as e:
                log.warning("fix_skipped", line_number=error.line_number, error=str(e))

    if args.apply_suggestions:
        error_lines = {error.line_number for error in result.errors}
        for suggestion in result.open_suggestions:
            if suggestion.line_number in error_lines:
                continue
            try:
                session.apply_suggestion(suggestion.line_number, suggestion.suggestion)
            except ReviewerError as e:
                log.warning(
                    "suggestion_skipped", line_number=suggestion.line_number, error=str(e)
                )

    print()
    print(render_editor(editor_view(session.state)))
    print()
    print(render_explanation(explanation_view(session.state)))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.list_languages:
        from ai_code_reviewer.ui.console import render_languages

        print(render_languages())
        return 0

    from ai_code_reviewer.utils.logging import clear_context

    setup_logging(debug=args.debug, log_format=args.format)

    try:
        return asyncio.run(run_review(args))
    except KeyboardInterrupt:
        log.info("shutting_down_gracefully")
        return 130
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
