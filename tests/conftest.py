"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- In-memory DocumentStore that replays edit scripts on a text buffer
- In-memory ObjectStore with switchable failures
- Document model factories
- A Markdown workspace on disk (tmp_path) with sample images
"""

from typing import Dict, List, Optional

import pytest

from mdimport.environments.base import APIError, DocumentStore, ObjectStore, UploadedObject
from mdimport.environments.google.docs.schemas import GoogleDoc
from mdimport.images.contracts import DeleteRange, InsertImage


# ---------------------------------------------------------------------------
# DOCUMENT MODEL FACTORIES
# ---------------------------------------------------------------------------

def make_paragraph(runs: List[tuple], start_index: Optional[int] = None) -> dict:
    """
    Raw Docs API paragraph element from (start_index, content) runs.
    """
    elements = [
        {
            "startIndex": run_start,
            "endIndex": run_start + len(content),
            "textRun": {"content": content},
        }
        for run_start, content in runs
    ]
    first = runs[0][0] if runs else (start_index or 1)
    return {"startIndex": first, "paragraph": {"elements": elements}}


def make_document(content: List[dict], document_id: str = "doc-123") -> GoogleDoc:
    """GoogleDoc with a section break followed by content."""
    body = [{"endIndex": 1, "sectionBreak": {"sectionStyle": {}}}] + content
    return GoogleDoc.model_validate(
        {"documentId": document_id, "title": "Test Doc", "body": {"content": body}}
    )


def document_from_text(text: str, document_id: str = "doc-123") -> GoogleDoc:
    """One paragraph (and one text run) per line, starting at index 1."""
    content = []
    index = 1
    for line in text.splitlines(keepends=True):
        content.append(make_paragraph([(index, line)]))
        index += len(line)
    return make_document(content, document_id=document_id)


# ---------------------------------------------------------------------------
# FAKE STORES
# ---------------------------------------------------------------------------

class FakeDocumentStore(DocumentStore):
    """
    Document held as a list of buffer cells; index 1 is the first cell.

    batch_apply replays the script the way Docs does: each operation sees
    the buffer left behind by the previous one. An inserted image takes
    exactly one cell, rendered as [img:<url>].
    """

    def __init__(self):
        self.buffer: List[str] = []
        self.document_id = "doc-123"
        self.created_with: Optional[dict] = None
        self.applied: List[list] = []

    async def create_or_get_document(self, initial_text, title, parent_id=None, document_id=None):
        self.created_with = {
            "text": initial_text,
            "title": title,
            "parent_id": parent_id,
            "document_id": document_id,
        }
        if document_id:
            self.document_id = document_id
        if not initial_text.endswith("\n"):
            initial_text += "\n"
        self.buffer.extend(initial_text)
        return self.document_id

    async def get_document(self, document_id):
        return document_from_text(self.text, document_id=document_id)

    async def batch_apply(self, document_id, operations):
        self.applied.append(list(operations))
        for operation in operations:
            if isinstance(operation, DeleteRange):
                assert 1 <= operation.start < operation.end <= len(self.buffer) + 1
                del self.buffer[operation.start - 1:operation.end - 1]
            elif isinstance(operation, InsertImage):
                assert 1 <= operation.at_index <= len(self.buffer) + 1
                self.buffer.insert(operation.at_index - 1, f"[img:{operation.url}]")
            else:
                raise AssertionError(f"unexpected operation {operation!r}")

    @property
    def text(self) -> str:
        return "".join(self.buffer)


class FakeObjectStore(ObjectStore):
    """Object store recording every call; failures are switched on per step."""

    def __init__(self, return_url_on_upload: bool = True):
        self.return_url_on_upload = return_url_on_upload
        self.objects: Dict[str, bytes] = {}
        self.public: set = set()
        self.deleted: List[str] = []
        self.fail_upload = False
        self.fail_permission = False
        self.fail_get_url = False
        self.fail_delete = False
        self.url_available = True
        self._counter = 0

    async def upload(self, data, mime_type, name):
        if self.fail_upload:
            raise APIError("quota exceeded", status_code=403)
        self._counter += 1
        object_id = f"obj-{self._counter}"
        self.objects[object_id] = data
        url = self._url(object_id) if self.return_url_on_upload else None
        return UploadedObject(object_id=object_id, url=url)

    async def set_public_readable(self, object_id):
        if self.fail_permission:
            raise APIError("permission denied", status_code=403)
        self.public.add(object_id)

    async def get_public_url(self, object_id):
        if self.fail_get_url:
            raise APIError("backend error", status_code=500)
        return self._url(object_id) if self.url_available else None

    async def delete(self, object_id):
        if self.fail_delete:
            raise APIError("delete failed", status_code=500)
        self.deleted.append(object_id)
        self.objects.pop(object_id, None)

    @staticmethod
    def _url(object_id: str) -> str:
        return f"https://drive.example.com/uc?id={object_id}"


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def docs_dir(tmp_path):
    """
    A Markdown workspace:

        tmp/docs/note.md
        tmp/docs/images/a.png
        tmp/docs/images/b.jpg
        tmp/secret.png           (outside the docs directory)
    """
    docs = tmp_path / "docs"
    images = docs / "images"
    images.mkdir(parents=True)
    (images / "a.png").write_bytes(PNG_BYTES)
    (images / "b.jpg").write_bytes(b"\xff\xd8\xff\xe0jpeg")
    (tmp_path / "secret.png").write_bytes(PNG_BYTES)
    (docs / "note.md").write_text("# Note\n", encoding="utf-8")
    return docs
