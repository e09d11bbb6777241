"""CLI entry point for the artifact converter.

Runs the full pipeline on a file: classification, declaration extraction,
HTML rendering, and QA validation.

Usage::

    # Convert an SVG or chart component to a standalone page
    python -m artifact_html.cli convert chart.tsx \\
        --artifact-version v2 \\
        --output output/chart.html

    # Read from stdin, write to stdout
    cat drawing.svg | python -m artifact_html.cli convert - --artifact-version latest

    # Show how a source file is classified and which charts are recovered
    python -m artifact_html.cli inspect chart.tsx --json

    # Validate a previously rendered page against its source
    python -m artifact_html.cli validate output/chart.html chart.tsx

    # Write the default settings as an editable YAML file
    python -m artifact_html.cli defaults --output settings.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from artifact_html.converter import InputMissing, validate_arguments
from artifact_html.extractor.classifier import classify
from artifact_html.extractor.declarations import extract
from artifact_html.generator.html_builder import HTMLBuilder
from artifact_html.qa.validator import DocumentValidator
from artifact_html.schema.loader import dump_settings, load_settings
from artifact_html.schema.models import ContentKind
from artifact_html.schema.settings import ConverterSettings


# ---------------------------------------------------------------------------
# Input loading
# ---------------------------------------------------------------------------

def _load_settings(args) -> ConverterSettings:
    """Load ConverterSettings from --config, or the defaults."""
    config = getattr(args, "config", None)
    if not config:
        return ConverterSettings()
    path = Path(config)
    if not path.exists():
        _error(f"Settings file not found: {path}")
    try:
        return load_settings(path)
    except ValueError as e:
        _error(f"Invalid settings in {path}: {e}")


def _read_source(name: str) -> str:
    """Read artifact text from a path, or stdin for '-'."""
    if name == "-":
        try:
            return sys.stdin.read()
        except UnicodeDecodeError as e:
            _error(f"Standard input is not UTF-8 text: {e}")
    path = Path(name)
    if not path.exists():
        _error(f"Input file not found: {path}")
    return _read_text(path)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        _error(f"{path} is not UTF-8 text: {e}")


def _payload_for(content: str, settings: ConverterSettings):
    """Classify content and return (kind, payload) as the renderer sees it."""
    kind = classify(content)
    if kind is ContentKind.MARKUP:
        return kind, content
    return kind, extract(content, settings)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_convert(args):
    """Convert an artifact into an HTML page."""
    settings = _load_settings(args)
    content = _read_source(args.input)
    try:
        artifact = validate_arguments(content, args.artifact_version)
    except InputMissing as e:
        _error(str(e))

    kind, payload = _payload_for(artifact.content, settings)
    _info(f"Content kind: {kind.value}")
    if kind is ContentKind.CODE:
        _info(f"Extraction stage: {payload.stage} ({len(payload)} chart(s))")

    source = artifact.content if kind is ContentKind.CODE else None
    document = HTMLBuilder(settings).render(kind, payload, artifact.version, source=source)

    if not args.skip_qa:
        _info("Running QA validation...")
        qa_result = DocumentValidator(settings).validate(document, kind, payload)
        if qa_result.passed:
            _info(qa_result.summary())
        else:
            _warn(qa_result.summary())
            if args.verbose:
                print(qa_result.report(), file=sys.stderr)
            if not args.force:
                _error("QA validation failed. Use --force to write anyway, "
                       "or --skip-qa to skip validation.")
    else:
        _info("QA validation skipped (--skip-qa)")

    if not args.output:
        sys.stdout.write(document)
        return

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    _info(f"Written: {output} ({len(document):,} chars)")


def cmd_inspect(args):
    """Show classification and recovered chart declarations."""
    settings = _load_settings(args)
    content = _read_source(args.input)
    kind, payload = _payload_for(content, settings)

    if args.json:
        data = {"kind": kind.value}
        if kind is ContentKind.CODE:
            data.update(payload.to_dict())
        print(json.dumps(data, indent=2))
        return

    print(f"Kind:        {kind.value}")
    if kind is ContentKind.MARKUP:
        print(f"Markup:      {len(content):,} chars")
        return

    print(f"Stage:       {payload.stage}")
    print(f"Charts:      {len(payload)}")
    print()
    for idx, decl in enumerate(payload):
        print(f"  [{idx:2d}] {decl.title} — {decl.kind.value}"
              f" — {len(decl.labels)} label(s), {len(decl.series)} series")
        for series in decl.series:
            values = ", ".join(f"{v:g}" for v in series.values)
            print(f"       {series.label}: {values}")


def cmd_validate(args):
    """Validate a rendered page against the source it came from."""
    settings = _load_settings(args)
    document_path = Path(args.document)
    if not document_path.exists():
        _error(f"Document not found: {document_path}")
    document = _read_text(document_path)
    content = _read_source(args.input)

    _info(f"Validating {document_path} against {args.input}")
    kind, payload = _payload_for(content, settings)
    qa_result = DocumentValidator(settings).validate(document, kind, payload)

    print(qa_result.report())
    sys.exit(0 if qa_result.passed else 1)


def cmd_defaults(args):
    """Write the default settings as YAML."""
    text = dump_settings(ConverterSettings())
    if not args.output:
        sys.stdout.write(text)
        return
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    _info(f"Written: {output}")


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _info(msg):
    print(f"  {msg}", file=sys.stderr)


def _warn(msg):
    print(f"  WARNING: {msg}", file=sys.stderr)


def _error(msg):
    print(f"  ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="artifact-html",
        description="Convert SVG or chart component artifacts to standalone HTML pages.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- convert ----
    conv = subparsers.add_parser(
        "convert",
        help="Convert an artifact file to an HTML page.",
    )
    conv.add_argument("input", help="Artifact source file, or '-' for stdin.")
    conv.add_argument(
        "--artifact-version",
        default="latest",
        help="Version label shown on the page (default: latest).",
    )
    conv.add_argument(
        "-o", "--output",
        help="Output HTML file path (default: stdout).",
    )
    _add_config_arg(conv)
    conv.add_argument(
        "--skip-qa",
        action="store_true",
        default=False,
        help="Skip QA validation after rendering.",
    )
    conv.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Write output even if QA validation fails.",
    )
    _add_verbose_arg(conv, "Show detailed output (full QA report, extraction log).")
    conv.set_defaults(func=cmd_convert)

    # ---- inspect ----
    insp = subparsers.add_parser(
        "inspect",
        help="Show content kind and recovered chart declarations.",
    )
    insp.add_argument("input", help="Artifact source file, or '-' for stdin.")
    _add_config_arg(insp)
    insp.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print machine-readable JSON.",
    )
    _add_verbose_arg(insp, "Log extraction stage fall-through.")
    insp.set_defaults(func=cmd_inspect)

    # ---- validate ----
    val = subparsers.add_parser(
        "validate",
        help="Validate a rendered HTML page against its source artifact.",
    )
    val.add_argument("document", help="Rendered HTML file.")
    val.add_argument("input", help="Artifact source file, or '-' for stdin.")
    _add_config_arg(val)
    val.set_defaults(func=cmd_validate)

    # ---- defaults ----
    dflt = subparsers.add_parser(
        "defaults",
        help="Print or write the default settings as YAML.",
    )
    dflt.add_argument(
        "-o", "--output",
        help="Output YAML file path (default: stdout).",
    )
    dflt.set_defaults(func=cmd_defaults)

    return parser


def _add_config_arg(parser):
    """Add --config to a subparser."""
    parser.add_argument(
        "--config",
        help="Path to a YAML settings file (see the 'defaults' command).",
    )


def _add_verbose_arg(parser, help_text):
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help=help_text,
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "verbose", False):
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
    args.func(args)


if __name__ == "__main__":
    main()
