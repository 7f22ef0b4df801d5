"""Pseudo-translation of XLIFF documents.

Translation replaces characters by look-alikes, so translated texts stay
readable while untranslated texts stand out in the UI.
"""

from __future__ import annotations

import logging
from typing import Protocol
from xml.dom import minidom
from xml.dom.minidom import Document, Element, Node
from xml.parsers.expat import ExpatError

from transim_core.ports.facade import FacadeErrorDetails, InvalidContentError

_log = logging.getLogger(__name__)

TRANSLATE: dict[str, str] = {
    "a": "â",
    "b": "ƀ",
    "c": "ƈ",
    "d": "ď",
    "e": "é",
    "f": "ḟ",
    "g": "ġ",
    "h": "ĥ",
    "i": "ĩ",
    "j": "ɉ",
    "k": "ķ",
    "l": "ļ",
    "m": "Ɯ",
    "n": "ň",
    "o": "ō",
    "p": "ƥ",
    "q": "ƌ",
    "r": "ȑ",
    "s": "ș",
    "t": "ț",
    "u": "ǚ",
    "v": "˄",
    "w": "ŵ",
    "x": "ˣ",
    "y": "ʎ",
    "z": "ź",
    "ä": "å",
    "ö": "õ",
    "ü": "û",
    "A": "Â",
    "B": "ß",
    "C": "Ç",
    "D": "Ð",
    "E": "Ë",
    "F": "Ƹ",
    "G": "Ġ",
    "H": "Ħ",
    "I": "Ĭ",
    "J": "Ĵ",
    "K": "Ķ",
    "L": "Ŀ",
    "M": "Щ",
    "N": "Ň",
    "O": "Õ",
    "P": "Þ",
    "Q": "Ƣ",
    "R": "Ȑ",
    "S": "Ș",
    "T": "Ʈ",
    "U": "Ǚ",
    "V": "Ʌ",
    "W": "ʩ",
    "X": "Ӿ",
    "Y": "Ӌ",
    "Z": "Ϟ",
    "Ä": "Ā",
    "Ö": "Ō",
    "Ü": "Ŭ",
    "0": "♡",
    "1": "Ⅰ",
    "2": "Ⅱ",
    "3": "Ⅲ",
    "4": "Ⅳ",
    "5": "Ⅴ",
    "6": "Ⅵ",
    "7": "Ⅶ",
    "8": "Ⅷ",
    "9": "Ⅸ",
    "_": "☂",
}

_TRANSLATION_TABLE = str.maketrans(TRANSLATE)


class TranslationInterceptor(Protocol):
    """Hooks applied to the pseudo-translation result."""

    def post_translate_text(self, target_content: str) -> str:
        """Modify a translated trans-unit target text."""
        ...

    def post_translate_document(self, document: Document) -> None:
        """Modify the translated document in place."""
        ...


def translate_text(text: str) -> str:
    """Pseudo-translate a text by replacing characters with look-alikes."""
    return text.translate(_TRANSLATION_TABLE)


def text_content(node: Node) -> str:
    """Return the concatenated text of a node and its descendants."""
    if node.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE):
        return node.data
    return "".join(text_content(child) for child in node.childNodes)


def set_text_content(document: Document, element: Element, text: str) -> None:
    """Replace all children of an element by a single text node."""
    while element.firstChild is not None:
        element.removeChild(element.firstChild).unlink()
    if text:
        element.appendChild(document.createTextNode(text))


def translate_xliff(xliff: str, interceptor: TranslationInterceptor) -> str:
    """Pseudo-translate the targets of all trans-units of an XLIFF document.

    For each ``trans-unit`` the text of its first ``target`` element is
    translated and passed through the interceptor. Trans-units without a
    pre-populated target are logged and left untouched. Finally the whole
    document is handed to the interceptor.

    Args:
        xliff: Untranslated XLIFF.
        interceptor: Hooks for the translated texts and document.

    Returns:
        str: Pseudo-translated XLIFF.

    Raises:
        InvalidContentError: If the content is not well-formed XML.
    """
    try:
        document = minidom.parseString(xliff.encode("utf-8"))
    except ExpatError as exc:
        raise InvalidContentError(
            f"Failed to parse XLIFF: {exc}",
            details=FacadeErrorDetails(operation="translate_xliff", reason=str(exc)),
        ) from exc

    try:
        for index, trans_unit in enumerate(
            document.getElementsByTagName("trans-unit")
        ):
            targets = trans_unit.getElementsByTagName("target")
            if not targets:
                _log.warning(
                    "Expected pre-populated target element missing for "
                    "trans-unit element %d. Pseudo-translation omitted.",
                    index,
                )
                continue
            target = targets[0]
            target_content = text_content(target)
            translated = interceptor.post_translate_text(
                translate_text(target_content)
            )
            set_text_content(document, target, translated)
            _log.debug("Pseudo-translated %r to %r", target_content, translated)

        interceptor.post_translate_document(document)
        return document.toxml(encoding="utf-8").decode("utf-8")
    finally:
        document.unlink()
