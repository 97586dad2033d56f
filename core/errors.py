"""
Errors
======

Exceptions raised by the services layer. Validators never raise these;
they report problems as ValidationResult values instead.
"""


class NMYAMLError(Exception):
    """Base class for all project errors."""


class UnsupportedFileTypeError(NMYAMLError):
    """Raised when a file extension has no matching validator."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension or '(none)'}")


class YamlFormatError(NMYAMLError):
    """Raised when YAML cannot be parsed for formatting."""
