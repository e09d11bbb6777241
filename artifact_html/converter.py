"""Conversion entry point — validates arguments and runs the pipeline.

    artifact -> classify -> markup: render markup
                         -> code:   extract -> render charts

``convert`` is what a protocol layer (a tool server, the CLI) calls with the
two raw arguments. It always returns a ConversionResult; argument problems
come back as user-facing error text rather than exceptions.

Usage::

    from artifact_html.converter import convert

    result = convert(svg_text, "v1")
    if not result.is_error:
        Path("out.html").write_text(result.text)
"""

import logging
from typing import Any

from artifact_html.extractor.classifier import classify
from artifact_html.extractor.declarations import extract
from artifact_html.generator.html_builder import HTMLBuilder
from artifact_html.schema import defaults
from artifact_html.schema.models import Artifact, ContentKind, ConversionResult
from artifact_html.schema.settings import ConverterSettings

logger = logging.getLogger(__name__)

MISSING_CONTENT_MESSAGE = (
    "Error: No artifact content provided. Please provide the TypeScript or SVG "
    "code from an artifact or create one first."
)
MISSING_VERSION_MESSAGE = (
    "Error: No artifact version specified. Please specify a version "
    "(e.g., 'v1', 'latest')."
)


class InputMissing(ValueError):
    """An argument is absent, blank, or not text."""


def validate_arguments(content: Any, version: Any) -> Artifact:
    """Check both raw arguments and wrap them in an Artifact.

    Raises:
        InputMissing: With the message to show the caller.
    """
    if not isinstance(content, str) or not content.strip():
        raise InputMissing(MISSING_CONTENT_MESSAGE)
    if not isinstance(version, str) or not version.strip():
        raise InputMissing(MISSING_VERSION_MESSAGE)
    return Artifact(content=content, version=version)


def convert_artifact(artifact: Artifact,
                     settings: ConverterSettings | None = None) -> str:
    """Convert one artifact to a document string.

    Blank content returns a short error string without classifying or
    extracting anything.
    """
    settings = settings or ConverterSettings()
    if not artifact.content.strip():
        return defaults.EMPTY_CODE_MESSAGE

    kind = classify(artifact.content)
    logger.debug("Artifact %s classified as %s", artifact.version, kind.value)
    builder = HTMLBuilder(settings)
    if kind is ContentKind.MARKUP:
        return builder.render(kind, artifact.content, artifact.version)

    result = extract(artifact.content, settings)
    logger.debug("Extraction stage %r: %d chart(s)", result.stage, len(result))
    return builder.render(kind, result, artifact.version, source=artifact.content)


def convert(content: Any, version: Any,
            settings: ConverterSettings | None = None) -> ConversionResult:
    """Validate the raw arguments and convert. Never raises."""
    try:
        artifact = validate_arguments(content, version)
    except InputMissing as e:
        return ConversionResult(text=str(e), is_error=True)
    return ConversionResult(text=convert_artifact(artifact, settings))
