"""
Google Environment Module - Google Workspace Integration

Architecture:
=============
google/
├── __init__.py           # Module exports
├── base_client.py        # Shared authenticated HTTP plumbing
├── docs/                 # Google Docs API (DocumentStore)
│   ├── __init__.py
│   ├── client.py
│   └── schemas.py
└── drive/                # Google Drive API (ObjectStore)
    ├── __init__.py
    ├── client.py
    └── schemas.py

Usage:
======
    from mdimport.environments.google import GoogleDocsClient, GoogleDriveClient

    docs = GoogleDocsClient(access_token=token)
    drive = GoogleDriveClient(access_token=token)
"""

from mdimport.environments.google.docs import GoogleDocsClient, GoogleDoc
from mdimport.environments.google.drive import GoogleDriveClient

__all__ = [
    "GoogleDocsClient",
    "GoogleDriveClient",
    "GoogleDoc",
]
