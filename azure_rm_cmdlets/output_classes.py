"""
Display wrappers for Azure Monitor metric objects.
"""

from typing import Iterator, List, Optional

from pydantic import BaseModel, Field
from tabulate import tabulate


class Dimension(BaseModel):
    """A metric dimension and the values seen for it."""

    Name: str
    LocalizedName: Optional[str] = None
    Values: List[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.LocalizedName or self.Name


class DimensionCollection:
    """Wraps a list of dimensions so they print as an indented block."""

    HEADERS = ["Name", "Localized Name", "Values"]

    def __init__(self, dimensions: Optional[List[Dimension]] = None, indentation_tabs: int = 1):
        """
        Args:
            dimensions: The metric dimensions
            indentation_tabs: Tab stops prefixed to every rendered line
        """
        self.dimensions = list(dimensions or [])
        self.indentation_tabs = indentation_tabs

    def __len__(self) -> int:
        return len(self.dimensions)

    def __iter__(self) -> Iterator[Dimension]:
        return iter(self.dimensions)

    def names(self) -> List[str]:
        return [d.Name for d in self.dimensions]

    def __str__(self) -> str:
        if not self.dimensions:
            return ""

        rows = [
            [d.Name, d.display_name, ", ".join(d.Values)] for d in self.dimensions
        ]
        table = tabulate(rows, headers=self.HEADERS, tablefmt="plain")
        indent = "\t" * self.indentation_tabs
        return "\n".join(indent + line for line in table.splitlines())
