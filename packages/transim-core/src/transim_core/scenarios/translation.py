"""Scenarios producing malformed translation results."""

from __future__ import annotations

from xml.dom.minidom import Document, Element

from transim_core.mock.lorem_ipsum import lorem_ipsum
from transim_core.scenarios.base import Scenario

CMXLIFF_NAMESPACE = "http://www.coremedia.com/2013/xliff-extensions-1.0"
CMXLIFF_TARGET = "cmxliff:target"
CONTENT_ID_PREFIX = "coremedia:///cap/content/"
INVALID_NAMESPACE = "intentionally"

# Long enough to exceed typical string property limits.
LENGTH_CHALLENGE = 2048
# Even numbers are no valid content ids, so these never exist.
NON_EXISTING_CONTENT_ID_START = 999998


def format_content_id(numeric_id: int) -> str:
    """Format a numeric content id as content URI."""
    return f"{CONTENT_ID_PREFIX}{numeric_id}"


def _content_targets(document: Document) -> list[tuple[int, Element]]:
    files = document.documentElement.getElementsByTagName("file")
    return [
        (index, element)
        for index, element in enumerate(files)
        if element.getAttributeNS(CMXLIFF_NAMESPACE, "target").startswith(
            CONTENT_ID_PREFIX
        )
    ]


class TranslateInvalidXliffScenario(Scenario):
    """Translated XLIFF contains an element unknown to the schema."""

    id = "translate-invalid-xliff"
    description = "Downloaded XLIFF does not validate."

    def post_translate_document(self, document: Document) -> None:
        document.documentElement.appendChild(
            document.createElementNS(INVALID_NAMESPACE, "invalid")
        )


class TranslateEmptyTransunitTargetScenario(Scenario):
    """Every translated target is empty."""

    id = "translate-empty-transunit-target"
    description = "Downloaded trans-unit targets are empty."

    def post_translate_text(self, target_content: str) -> str:
        return ""


class TranslateStringTooLongScenario(Scenario):
    """Every translated target is padded with filler text."""

    id = "translate-string-too-long"
    description = f"Downloaded targets are padded to {LENGTH_CHALLENGE} characters."

    def post_translate_text(self, target_content: str) -> str:
        return target_content + lorem_ipsum(LENGTH_CHALLENGE - len(target_content))


class TranslateInvalidContentIdScenario(Scenario):
    """Translated files refer to malformed content ids."""

    id = "translate-invalid-content-id"
    description = "Downloaded files target invalid content ids."

    def post_translate_document(self, document: Document) -> None:
        for index, element in _content_targets(document):
            element.setAttributeNS(CMXLIFF_NAMESPACE, CMXLIFF_TARGET, f"invalid:{index}")


class TranslateDoesNotExistScenario(Scenario):
    """Translated files refer to contents which do not exist."""

    id = "translate-does-not-exist"
    description = "Downloaded files target non-existing contents."

    def post_translate_document(self, document: Document) -> None:
        replacement_id = NON_EXISTING_CONTENT_ID_START
        for _, element in _content_targets(document):
            element.setAttributeNS(
                CMXLIFF_NAMESPACE, CMXLIFF_TARGET, format_content_id(replacement_id)
            )
            replacement_id -= 2
