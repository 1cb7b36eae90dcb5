"""
Error types raised while reading XMD documents.

All errors derive from XMDError, itself a ValueError, so callers that only
care about "bad input" can catch a single type.

:return : XMD error hierarchy.
:return: Exception classes for structure, identifier and integrity failures.
"""

from typing import List, Optional


class XMDError(ValueError):
    """Base class for every XMD reading failure."""


class StructureMissing(XMDError):
    """
    Required node could not be located in the document tree.

    :param node_name: Tag of the missing node (model or data).
    :return : StructureMissing instance.
    :return: Fatal structure error.
    """

    def __init__(self, node_name: str) -> None:
        self.node_name = node_name
        super().__init__(f"Could not locate <{node_name}> node in document")


class MalformedIdentifier(XMDError):
    """
    Identifier attribute is absent or not a non-negative integer.

    :param tag: Tag of the element carrying the attribute.
    :param attribute: Attribute name (id, source, target, event).
    :param raw_value: Raw attribute value, None when absent.
    :return : MalformedIdentifier instance.
    :return: Identifier parse error.
    """

    def __init__(self, tag: str, attribute: str, raw_value: Optional[str]) -> None:
        self.tag = tag
        self.attribute = attribute
        self.raw_value = raw_value
        if raw_value is None:
            message = f"<{tag}> is missing required attribute '{attribute}'"
        else:
            message = (
                f"<{tag}> attribute '{attribute}' is not a non-negative integer: "
                f"{raw_value!r}"
            )
        super().__init__(message)


class IntegrityViolation(XMDError):
    """
    Duplicate identifiers or dangling transition references.

    :param problems: Human-readable description of each violation.
    :return : IntegrityViolation instance.
    :return: Model integrity error.
    """

    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        summary = "; ".join(self.problems[:5])
        if len(self.problems) > 5:
            summary += f"; ... ({len(self.problems) - 5} more)"
        super().__init__(f"Model integrity violated: {summary}")


class BuilderFinalized(XMDError):
    """Model builder was used after it produced its model."""


class UnsupportedFileType(XMDError):
    """
    Source file does not carry the .xmd extension.

    :param extension: Offending extension (may be empty).
    :return : UnsupportedFileType instance.
    :return: File type error.
    """

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(
            f"Unsupported file type {extension or '(none)'}. "
            "Only .xmd files are currently supported."
        )


class DocumentReadError(XMDError):
    """
    Source file could not be read or is not well-formed XML.

    :param filepath: Path that failed.
    :param reason: Underlying failure description.
    :return : DocumentReadError instance.
    :return: Read error.
    """

    def __init__(self, filepath: str, reason: str) -> None:
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Failed to read XML file: {filepath} ({reason})")
