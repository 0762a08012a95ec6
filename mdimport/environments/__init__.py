"""
Environments Module - External Service Integrations

This module holds the remote collaborators of the Markdown importer.

Architecture Overview:
======================
environments/
├── __init__.py           # Module exports
├── base.py               # Exceptions and abstract stores
└── google/               # Google Workspace integration
    ├── docs/             # Google Docs API (DocumentStore)
    │   ├── client.py
    │   └── schemas.py
    └── drive/            # Google Drive API (ObjectStore)
        ├── client.py
        └── schemas.py

Design Principles:
==================
1. The import engine only sees DocumentStore / ObjectStore
2. Each Google service has its own module
3. Each module can be tested independently
"""

from mdimport.environments.base import (
    EnvironmentService,
    EnvironmentError,
    APIError,
    DocumentStore,
    ObjectStore,
    UploadedObject,
)

__all__ = [
    "EnvironmentService",
    "EnvironmentError",
    "APIError",
    "DocumentStore",
    "ObjectStore",
    "UploadedObject",
]
