import argparse
import json
import sys
from typing import List, Optional

from stepcheck.diagnostics.markers import Diagnostics, build_diagnostics
from stepcheck.dsl.dsl_loader import DefinitionLoadError, detect_format, read_dsl_file
from stepcheck.dsl.dsl_model import Severity
from stepcheck.utils.logger import log_error, log_info, setup_logging

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def format_text(file: str, diagnostics: Diagnostics) -> List[str]:
    lines = []
    for m in diagnostics.markers:
        where = f" ({m.path})" if m.path else ""
        lines.append(f"{file}:{m.start_line}:{m.start_column}: {m.severity.value}: {m.message}{where}")
    summary = diagnostics.summary
    if summary.status == "ok":
        lines.append(f"✅ {file}: no issues")
    else:
        lines.append(f"❌ {file}: {summary.error_count} error(s), {summary.warning_count} warning(s)")
    return lines


def _fails(diagnostics: Diagnostics, strict: bool) -> bool:
    if diagnostics.summary.error_count:
        return True
    return strict and any(m.severity == Severity.WARNING for m in diagnostics.markers)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate state-machine workflow definitions.")
    parser.add_argument("files", nargs="+", help="Path to the DSL file(s) (JSON/YAML)")
    parser.add_argument("--format", choices=["text", "json"], default="text", dest="output_format",
                        help="Output format")
    parser.add_argument("--strict", action="store_true", help="Treat warnings as failures")
    parser.add_argument("--log-level", default=None, help="Logging level (default from STEPCHECK_LOG_LEVEL)")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    exit_code = EXIT_OK
    report = {}
    for file in args.files:
        try:
            fmt = detect_format(file)
            text = read_dsl_file(file)
        except DefinitionLoadError as e:
            log_error(str(e))
            exit_code = EXIT_UNREADABLE
            continue

        diagnostics = build_diagnostics(text, fmt)
        log_info(f"{file}: {diagnostics.summary.status}")

        if args.output_format == "json":
            report[file] = diagnostics.model_dump(mode="json")
        else:
            for line in format_text(file, diagnostics):
                print(line)

        if _fails(diagnostics, args.strict) and exit_code == EXIT_OK:
            exit_code = EXIT_INVALID

    if args.output_format == "json":
        print(json.dumps(report, indent=2, ensure_ascii=False))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
