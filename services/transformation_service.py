"""
Transformation Service
======================

XML to YAML transformation through an XSLT stylesheet, followed by a
deterministic cleanup of the text the stylesheet emits.

Parse and transform errors from lxml propagate to the caller: malformed or
empty XML raises etree.XMLSyntaxError, a broken stylesheet raises
etree.XSLTParseError.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from lxml import etree

from core.settings import XSLT_SEARCH_PATHS
from services.export_service import ExportService

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_TRAILING_WHITESPACE = re.compile(r"[ \t]+$", re.MULTILINE)
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")
_BARE_KEY = re.compile(r"^(?P<indent>[ ]*)(?P<dash>- )?(?P<key>[^\s#\-][^#]*?):$")
_BLOCK_SCALAR = re.compile(r"(?::|^\s*-)\s*[|>][-+0-9]*$")


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _fill_empty_values(lines: List[str]) -> List[str]:
    """
    Rewrite `key:` lines with no value and no nested block into `key: ""`.

    A key has a nested block when the next non-blank line is indented
    deeper, or is a sequence item at the same indentation. Lines inside
    block scalars (`run: |` or a `- |` sequence item) are left alone.
    """
    result = []
    block_parent: Optional[int] = None

    for index, line in enumerate(lines):
        if block_parent is not None:
            if not line.strip() or _indent_of(line) > block_parent:
                result.append(line)
                continue
            block_parent = None

        if _BLOCK_SCALAR.search(line):
            block_parent = _indent_of(line)
            result.append(line)
            continue

        match = _BARE_KEY.match(line)
        if match is None or ": " in match.group("key"):
            result.append(line)
            continue

        key_indent = len(match.group("indent")) + (2 if match.group("dash") else 0)
        next_line = next((l for l in lines[index + 1:] if l.strip()), None)
        has_children = next_line is not None and (
            _indent_of(next_line) > key_indent
            or (_indent_of(next_line) == key_indent and next_line.lstrip().startswith("- "))
        )
        result.append(line if has_children else f'{line} ""')

    return result


def clean_yaml_output(yaml_content: str) -> str:
    """
    Normalize raw stylesheet output into tidy YAML text.

    - LF line endings
    - no leading blank lines
    - no trailing whitespace on any line
    - runs of blank lines collapsed to a single blank line
    - bare `key:` leaves rewritten to `key: ""`
    - exactly one trailing newline

    Applying it to its own output changes nothing.
    """
    yaml_content = yaml_content.replace("\r\n", "\n").replace("\r", "\n")
    yaml_content = _LEADING_BLANK_LINES.sub("", yaml_content)
    yaml_content = _TRAILING_WHITESPACE.sub("", yaml_content)
    yaml_content = _EXTRA_BLANK_LINES.sub("\n\n", yaml_content)
    yaml_content = "\n".join(_fill_empty_values(yaml_content.split("\n")))
    return yaml_content.rstrip("\n") + "\n"


def default_xslt_path() -> Path:
    """
    Locate the bundled stylesheet.

    Raises:
        FileNotFoundError: If none of the search locations has it
    """
    for candidate in XSLT_SEARCH_PATHS:
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(
        "Default XSLT transform file not found. Please specify --xslt."
    )


class TransformationService:
    """
    Service responsible for XSLT transformation of workflow XML.

    Only handles transformation and output cleanup; validation lives in
    the validators package.
    """

    def __init__(self, export_service: Optional[ExportService] = None):
        """
        Initialize transformation service.

        Args:
            export_service: Output writer (dependency injection)
        """
        self.export_service = export_service or ExportService()

    @staticmethod
    def _parser() -> etree.XMLParser:
        return etree.XMLParser(no_network=True, resolve_entities=False)

    def load_stylesheet(self, xslt_path: PathLike) -> etree.XSLT:
        """
        Load and compile an XSLT stylesheet.

        Raises:
            FileNotFoundError: If the stylesheet doesn't exist
            etree.XSLTParseError: If the stylesheet is malformed
        """
        xslt_path = Path(xslt_path)
        if not xslt_path.is_file():
            raise FileNotFoundError(f"XSLT stylesheet not found: {xslt_path}")

        logger.debug("Loading XSLT stylesheet: %s", xslt_path)
        return etree.XSLT(etree.parse(str(xslt_path), self._parser()))

    def _apply(self, document: etree._ElementTree, xslt_path: PathLike) -> str:
        transform = self.load_stylesheet(xslt_path)
        result = transform(document)
        for entry in transform.error_log:
            logger.warning("XSLT message: %s", entry.message)
        return clean_yaml_output(str(result))

    def transform(self, xml_path: PathLike, xslt_path: PathLike) -> str:
        """
        Transform an XML file to YAML text.

        Args:
            xml_path: Path to the XML file
            xslt_path: Path to the XSLT stylesheet

        Returns:
            Cleaned YAML text
        """
        xml_path = Path(xml_path)
        if not xml_path.is_file():
            raise FileNotFoundError(f"XML file not found: {xml_path}")

        logger.info("Transforming %s with %s", xml_path, xslt_path)
        document = etree.parse(str(xml_path), self._parser())
        return self._apply(document, xslt_path)

    def transform_content(self, xml_content: Union[str, bytes], xslt_path: PathLike) -> str:
        """
        Transform XML text to YAML text.

        Args:
            xml_content: XML document text
            xslt_path: Path to the XSLT stylesheet

        Returns:
            Cleaned YAML text
        """
        if isinstance(xml_content, str):
            xml_content = xml_content.encode("utf-8")
        root = etree.fromstring(xml_content, self._parser())
        return self._apply(etree.ElementTree(root), xslt_path)

    def transform_to_file(
        self, xml_path: PathLike, xslt_path: PathLike, output_path: PathLike
    ) -> str:
        """
        Transform an XML file and write the YAML to output_path.

        Creates the output directory when needed.

        Returns:
            The YAML text that was written
        """
        yaml_content = self.transform(xml_path, xslt_path)
        self.export_service.write_text(output_path, yaml_content)
        logger.info("Wrote %s", output_path)
        return yaml_content


def transform(xml_path: PathLike, xslt_path: PathLike) -> str:
    return TransformationService().transform(xml_path, xslt_path)


def transform_content(xml_content: Union[str, bytes], xslt_path: PathLike) -> str:
    return TransformationService().transform_content(xml_content, xslt_path)
