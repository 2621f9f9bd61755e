"""Custom exceptions for the export document engine."""

from typing import Any, Optional


class ExportDocsError(Exception):
    """Base exception for export document errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class MissingEntityError(ExportDocsError):
    """A related entity required by the document template is absent."""

    def __init__(self, entity: str, document: Optional[str] = None):
        target = f" for {document}" if document else ""
        super().__init__(f"Missing required entity '{entity}'{target}")
        self.entity = entity
        self.document = document


class MalformedValueError(ExportDocsError):
    """A field value could not be used: an unparseable date or number in strict mode, or an unknown currency."""

    def __init__(self, field: str, value: Any, details: Optional[str] = None):
        super().__init__(f"Malformed value for field '{field}': {value!r}", details)
        self.field = field
        self.value = value


class AssetError(ExportDocsError):
    """Exception raised when a letterhead or signature image cannot be used."""

    def __init__(self, asset: str, details: Optional[str] = None):
        super().__init__(f"Asset '{asset}' unavailable", details)
        self.asset = asset


class LayoutError(ExportDocsError):
    """Exception raised during layout calculation."""

    pass


class LayoutOverflowError(LayoutError):
    """A block that cannot be split is taller than a whole page."""

    def __init__(self, block: str, height: float, available: float):
        super().__init__(
            f"Block '{block}' does not fit on an empty page",
            f"needs {height:.2f}pt, page offers {available:.2f}pt",
        )
        self.block = block
        self.height = height
        self.available = available


class TableSpecError(LayoutError):
    """Column widths of a table do not match the declared table width."""

    pass


class RenderingError(ExportDocsError):
    """Exception raised while writing the PDF output."""

    pass
