"""Label sets given on the command line as ``key=value`` pairs."""

from __future__ import annotations


class LabelFormatError(ValueError):
    """Raised when a label selector string cannot be parsed."""


class Labels(dict):
    """A mapping of label keys to values that can be filled from selector strings."""

    def set(self, value: str) -> None:
        """Parse ``key=value,key2=value2`` and add the pairs to this mapping.

        A pair without ``=`` gets an empty value. A pair with more than one
        ``=`` is rejected.
        """
        for label in value.split(","):
            parts = label.split("=")
            if len(parts) > 2:
                raise LabelFormatError("invalid pod selector format")
            key = parts[0]
            self[key] = parts[1] if len(parts) == 2 else ""

    def is_cumulative(self) -> bool:
        """Labels may be given several times; every occurrence adds to the set."""
        return True

    def __str__(self) -> str:
        return ",".join(f"{key}={value}" for key, value in self.items())