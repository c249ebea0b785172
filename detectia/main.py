#!/usr/bin/env python3
"""
detectIA - AI Authorship Detector for Academic Text
===================================================

Command-line interface for analyzing a text without the GUI.

Usage:
    # Analyze a file
    python -m detectia.main --file essay.txt

    # Analyze text from stdin
    cat essay.txt | python -m detectia.main

    # Raw JSON result
    python -m detectia.main --file essay.txt --json

Options:
    --file, -f          Text file to analyze (default: stdin)
    --provider          LLM provider (gemini, openai, anthropic)
    --model             Model name override
    --language, -l      Language of messages and report text (en, es)
    --json              Print the result as JSON
    --verbose, -v       Verbose output

Environment Variables:
    GEMINI_API_KEY      API key for Google Gemini (default provider)
    OPENAI_API_KEY      API key for OpenAI
    ANTHROPIC_API_KEY   API key for Anthropic
    API_KEY             Fallback key for any provider

Exit codes:
    0  analysis succeeded
    1  no text, or the analysis failed
    2  the analysis service is not configured
"""

import argparse
import sys
from pathlib import Path

from .config import DetectorConfig, SUPPORTED_LANGUAGES, SUPPORTED_PROVIDERS
from .gui_integration.controller import InteractionController, ConfigurationStatus
from .reporting.report_builder import generate_text_report, generate_json_report


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="detectIA - estimate whether academic text was written by an AI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --file essay.txt
  cat essay.txt | %(prog)s --json
  %(prog)s --file ensayo.txt --language es --provider openai
        """
    )

    parser.add_argument(
        "-f", "--file",
        help="Text file to analyze (reads stdin when omitted)"
    )

    llm_group = parser.add_argument_group("Analysis Service")
    llm_group.add_argument(
        "--provider",
        choices=SUPPORTED_PROVIDERS,
        help="LLM provider (default: $DETECTIA_PROVIDER or gemini)"
    )
    llm_group.add_argument(
        "--model",
        help="Model name (default depends on provider)"
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "-l", "--language",
        choices=SUPPORTED_LANGUAGES,
        help="Language of messages and report text (default: $DETECTIA_LANGUAGE or en)"
    )
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a text report"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="detectIA 1.0.0"
    )

    args = parser.parse_args(argv)

    llm_settings = {}
    if args.provider:
        llm_settings["provider"] = args.provider
    if args.model:
        llm_settings["model"] = args.model

    config = DetectorConfig.from_dict({
        "llm": llm_settings,
        "language": args.language,
        "verbose": args.verbose,
    })

    # Failures are always reported; progress lines only with --verbose
    def log(message: str):
        if config.verbose or message.startswith("[!]") or message.startswith("    "):
            print(message, file=sys.stderr)

    controller = InteractionController.from_config(config, log_func=log)

    if controller.mount() is ConfigurationStatus.UNCONFIGURED:
        help_text = controller.configuration_help()
        print(f"[!] {help_text['title']}: {help_text['body']}", file=sys.stderr)
        print(f"    {help_text['action']}", file=sys.stderr)
        return 2

    if args.file:
        try:
            text = Path(args.file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[!] Error reading {args.file}: {e}", file=sys.stderr)
            return 1
    else:
        text = sys.stdin.read()

    controller.set_input(text)
    state = controller.submit()

    if state.error:
        print(f"[!] Error: {state.error}", file=sys.stderr)
        return 1

    if args.json:
        print(generate_json_report(state.result))
    else:
        print(generate_text_report(state.result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
