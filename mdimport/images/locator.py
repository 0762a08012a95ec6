"""
Placeholder Locator - Find <<IMG_N>> tokens in a converted Google Doc.

After Drive has turned the cleaned Markdown into a document, the
placeholders survive as literal text somewhere inside paragraph text
runs. Each run carries the absolute index of its first character, so
a token's absolute range is the run start plus the token's offset
within the run content.

Docs addresses characters in UTF-16 code units, so offsets inside a
run are measured in UTF-16 units as well.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from mdimport.environments.google.docs.schemas import GoogleDoc, StructuralElement
from mdimport.images.contracts import OffsetRange, placeholder_for


logger = logging.getLogger("mdimport.images.locator")


def utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def iter_text_runs(content: List[StructuralElement]) -> Iterator[Tuple[int, str]]:
    """
    Depth-first walk yielding (start_index, content) of every text run.

    Table cells are descended into; section breaks, tables of contents
    and non-text paragraph elements are skipped.
    """
    for element in content:
        kind = element.kind
        if kind == "paragraph":
            for paragraph_element in element.paragraph.elements:
                if paragraph_element.kind != "text_run":
                    continue
                if paragraph_element.start_index is None:
                    continue
                yield paragraph_element.start_index, paragraph_element.text_run.content
        elif kind == "table":
            for row in element.table.table_rows:
                for cell in row.table_cells:
                    yield from iter_text_runs(cell.content)


def find_placeholder_ranges(document: Optional[GoogleDoc], count: int) -> Dict[str, OffsetRange]:
    """
    Locate placeholders 0..count-1 in the document.

    Args:
        document: Freshly fetched document model
        count: Number of images extracted from the Markdown

    Returns:
        Mapping of placeholder token to its absolute [start, end) range.
        Tokens not present in the document are simply missing.
    """
    result: Dict[str, OffsetRange] = {}
    if document is None or document.body is None or not document.body.content or count <= 0:
        return result

    outstanding = [placeholder_for(i) for i in range(count)]

    for run_start, text in iter_text_runs(document.body.content):
        if not outstanding:
            break
        for token in list(outstanding):
            pos = text.find(token)
            if pos == -1:
                continue
            abs_start = run_start + utf16_len(text[:pos])
            result[token] = OffsetRange(start=abs_start, end=abs_start + utf16_len(token))
            outstanding.remove(token)

    if outstanding:
        logger.info(f"{len(outstanding)} of {count} placeholder(s) not found in document")

    return result
