# src/utbanner/cli.py
import sys
import argparse
import codecs
import os
from pathlib import Path

from utbanner.config import DEFAULT_ENCODING, DEFAULT_IGNORE_FILE
from utbanner.core.ignore import apply_visibility, load_ignore_spec
from utbanner.core.report import ReportError, load_report
from utbanner.core.runner import update_banners
from utbanner.core.summary import ConsoleNotifier, report_summary
from utbanner.logging import configure_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FILE_ERRORS = 2


def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Write '//UT Coverage' banners into the first line of covered source files."
    )
    parser.add_argument("report", type=str, help="Coverage report (.json or Cobertura .xml)")
    parser.add_argument("-r", "--root", type=str, default=os.getcwd(), help="Directory relative report paths start from")
    parser.add_argument("-f", "--filter", type=str, default="", help="Only files whose path contains this text")
    parser.add_argument(
        "--ignore-file",
        type=str,
        default=None,
        help=f"gitignore-style exclusions (default: {{root}}/{DEFAULT_IGNORE_FILE})",
    )
    parser.add_argument("-x", "--exclude", action="append", default=[], help="Extra exclusion pattern, repeatable")
    parser.add_argument("--encoding", type=str, default=DEFAULT_ENCODING, help="Text encoding of the source files")
    parser.add_argument("--log-file", type=str, default=None, help="Diagnostic log (default: a file in the temp dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every file decision")
    return parser


def main(argv=None) -> int:
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)
        logger = configure_logging(verbose=args.verbose)

        root_dir = Path(args.root).resolve()
        if not root_dir.is_dir():
            print(f"Error: Invalid directory '{root_dir}'", file=sys.stderr)
            return EXIT_FAILURE

        try:
            codecs.lookup(args.encoding)
        except LookupError:
            print(f"Error: Unknown encoding '{args.encoding}'", file=sys.stderr)
            return EXIT_FAILURE

        # 2. Report
        report = load_report(Path(args.report))
        if report.exit_code != 0:
            logger.warning(f"Your program has exited with error code: {report.exit_code}")

        # 3. Visibility (filter text + ignore rules)
        ignore_file = Path(args.ignore_file) if args.ignore_file else root_dir / DEFAULT_IGNORE_FILE
        spec = load_ignore_spec(ignore_file, extra_patterns=args.exclude)
        report = apply_visibility(report, args.filter, spec, root_dir)

        print(f"--- utbanner ---")
        print(f"Report:   {args.report}")
        print(f"Root:     {root_dir}")
        if args.filter:
            print(f"Filter:   {args.filter}")

        # 4. Run
        log_file = Path(args.log_file) if args.log_file else None
        summary = update_banners(report, root=root_dir, encoding=args.encoding, log_file=log_file)
        report_summary(summary, ConsoleNotifier())
        return EXIT_FILE_ERRORS if summary.error else EXIT_OK

    except ReportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except KeyboardInterrupt:
        print("\nCancelled.")
        return EXIT_FAILURE

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        return EXIT_FAILURE


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
