"""
Google Docs Module - Google Docs API Integration.

This module provides:
- GoogleDocsClient: DocumentStore backed by the Docs API
- GoogleDoc: Pydantic model of the document structure
- DocumentCreated: Metadata of a document created from Markdown

Usage:
======
    from mdimport.environments.google.docs import GoogleDocsClient, GoogleDoc

    client = GoogleDocsClient(access_token="ya29.xxx")
    doc = await client.get_document("1abc123...")
"""

from mdimport.environments.google.docs.client import GoogleDocsClient, docs_web_view_link
from mdimport.environments.google.docs.schemas import DocumentCreated, GoogleDoc

__all__ = [
    "GoogleDocsClient",
    "GoogleDoc",
    "DocumentCreated",
    "docs_web_view_link",
]
