"""
Format Service
==============

Re-serializes YAML in a consistent block style.

Works on the composed node tree so that key order, quoting and scalar
spelling survive (a bare `on:` stays `on:` instead of turning into
`true:`). Comments are not preserved.
"""

import difflib
import logging
from typing import List, Tuple

import yaml

from core.errors import YamlFormatError
from core.settings import DEFAULT_INDENT

logger = logging.getLogger(__name__)

# PyYAML's emitter only honours indents in this range
MIN_INDENT, MAX_INDENT = 2, 9


class IndentedSequenceDumper(yaml.SafeDumper):
    """Indents block sequences under their parent key."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def _to_block_style(node: yaml.Node) -> None:
    if isinstance(node, yaml.SequenceNode):
        node.flow_style = False
        for item in node.value:
            _to_block_style(item)
    elif isinstance(node, yaml.MappingNode):
        node.flow_style = False
        for key, value in node.value:
            _to_block_style(key)
            _to_block_style(value)


class FormatService:
    """
    Service responsible for YAML formatting.

    Follows SRP: Only handles formatting.
    """

    def format_yaml(self, yaml_content: str, indent: int = DEFAULT_INDENT) -> str:
        """
        Format YAML text.

        Args:
            yaml_content: YAML text
            indent: Spaces per nesting level (2 to 9)

        Returns:
            Formatted YAML ending with a single newline

        Raises:
            YamlFormatError: If the text is empty or not valid YAML
            ValueError: If indent is out of range
        """
        if not MIN_INDENT <= indent <= MAX_INDENT:
            raise ValueError(f"Indent must be between {MIN_INDENT} and {MAX_INDENT}")

        try:
            documents = list(yaml.compose_all(yaml_content, Loader=yaml.SafeLoader))
        except yaml.YAMLError as e:
            raise YamlFormatError(f"Cannot format invalid YAML: {e}") from e

        if not documents:
            raise YamlFormatError("YAML content is empty")

        for document in documents:
            _to_block_style(document)

        logger.debug("Formatting %d YAML document(s) with indent %d", len(documents), indent)
        formatted = yaml.serialize_all(
            documents,
            Dumper=IndentedSequenceDumper,
            indent=indent,
            width=4096,
            allow_unicode=True,
            explicit_start=len(documents) > 1,
        )
        return formatted.rstrip("\n") + "\n"

    def diff_lines(self, original: str, formatted: str) -> List[Tuple[str, str]]:
        """
        Lines removed and added by formatting.

        Returns:
            ("-", line) and ("+", line) pairs in file order
        """
        changes = []
        matcher = difflib.SequenceMatcher(
            a=original.splitlines(), b=formatted.splitlines(), autojunk=False
        )
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                continue
            changes.extend(("-", line) for line in matcher.a[i1:i2])
            changes.extend(("+", line) for line in matcher.b[j1:j2])
        return changes


def format_yaml(yaml_content: str, indent: int = DEFAULT_INDENT) -> str:
    return FormatService().format_yaml(yaml_content, indent)
