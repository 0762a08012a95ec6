"""
Google Docs Schemas - Data structures for Google Docs operations.

These Pydantic models represent Google Docs API responses
in a clean, typed format for use throughout the importer.

Every node that can hold different payloads exposes a `kind` so that
traversal code dispatches on one value instead of probing optional fields:

    StructuralElement.kind  -> "paragraph" | "table" | "section_break"
                               | "table_of_contents" | "other"
    ParagraphElement.kind   -> "text_run" | "inline_object" | "other"

Reference: https://developers.google.com/docs/api/reference/rest/v1/documents
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class TextRun(BaseModel):
    """
    A contiguous run of text with consistent formatting.

    Part of the document content structure.
    """
    content: str = Field("", description="The text content")

    class Config:
        populate_by_name = True


class InlineObjectElement(BaseModel):
    """An embedded object (image, drawing) inside a paragraph."""
    inline_object_id: Optional[str] = Field(None, alias="inlineObjectId")

    class Config:
        populate_by_name = True


class ParagraphElement(BaseModel):
    """
    An element in a paragraph (typically a text run).

    start_index is absolute: counted from the start of the document body.
    """
    text_run: Optional[TextRun] = Field(None, alias="textRun")
    inline_object_element: Optional[InlineObjectElement] = Field(None, alias="inlineObjectElement")
    start_index: Optional[int] = Field(None, alias="startIndex")
    end_index: Optional[int] = Field(None, alias="endIndex")

    class Config:
        populate_by_name = True

    @property
    def kind(self) -> str:
        if self.text_run is not None:
            return "text_run"
        if self.inline_object_element is not None:
            return "inline_object"
        return "other"

    def get_text(self) -> str:
        """Extract text content from this element."""
        if self.text_run:
            return self.text_run.content
        return ""


class Paragraph(BaseModel):
    """
    A paragraph in the document body.
    """
    elements: List[ParagraphElement] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def get_text(self) -> str:
        """Extract all text from this paragraph."""
        return "".join(elem.get_text() for elem in self.elements)


class TableCell(BaseModel):
    """A table cell; its content is a nested list of structural elements."""
    content: List["StructuralElement"] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class TableRow(BaseModel):
    table_cells: List[TableCell] = Field(default_factory=list, alias="tableCells")

    class Config:
        populate_by_name = True


class Table(BaseModel):
    rows: Optional[int] = None
    columns: Optional[int] = None
    table_rows: List[TableRow] = Field(default_factory=list, alias="tableRows")

    class Config:
        populate_by_name = True


class StructuralElement(BaseModel):
    """
    A structural element in the document body (paragraph, table, etc.).
    """
    paragraph: Optional[Paragraph] = None
    table: Optional[Table] = None
    section_break: Optional[Dict[str, Any]] = Field(None, alias="sectionBreak")
    table_of_contents: Optional[Dict[str, Any]] = Field(None, alias="tableOfContents")
    start_index: Optional[int] = Field(None, alias="startIndex")
    end_index: Optional[int] = Field(None, alias="endIndex")

    class Config:
        populate_by_name = True

    @property
    def kind(self) -> str:
        if self.paragraph is not None:
            return "paragraph"
        if self.table is not None:
            return "table"
        if self.section_break is not None:
            return "section_break"
        if self.table_of_contents is not None:
            return "table_of_contents"
        return "other"

    def get_text(self) -> str:
        """Extract text from this structural element."""
        if self.paragraph:
            return self.paragraph.get_text()
        return ""


TableCell.model_rebuild()


class DocumentBody(BaseModel):
    """
    The body content of a Google Doc.
    """
    content: List[StructuralElement] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def get_full_text(self) -> str:
        """Extract all text content from the document body."""
        return "".join(elem.get_text() for elem in self.content)


class GoogleDoc(BaseModel):
    """
    A Google Doc document.

    Contains the full document structure from the Docs API.

    Reference: https://developers.google.com/docs/api/reference/rest/v1/documents
    """
    document_id: str = Field(..., alias="documentId", description="Unique document identifier")
    title: str = Field("", description="Document title")
    body: Optional[DocumentBody] = Field(None, description="Document body content")
    revision_id: Optional[str] = Field(None, alias="revisionId")

    class Config:
        populate_by_name = True

    def get_plain_text(self) -> str:
        """Extract all plain text from the document."""
        if self.body:
            return self.body.get_full_text()
        return ""


class DocumentCreated(BaseModel):
    """
    Drive's answer to creating a Google Doc from uploaded Markdown.
    """
    id: str
    name: str = ""
    mime_type: Optional[str] = Field(None, alias="mimeType")
    web_view_link: Optional[str] = Field(None, alias="webViewLink")

    class Config:
        populate_by_name = True
