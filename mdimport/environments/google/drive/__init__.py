"""
Google Drive Module - Staging storage for imported images.

Usage:
======
    from mdimport.environments.google.drive import GoogleDriveClient

    drive = GoogleDriveClient(access_token="ya29.xxx")
"""

from mdimport.environments.google.drive.client import GoogleDriveClient
from mdimport.environments.google.drive.schemas import DriveFile, DrivePermission

__all__ = [
    "GoogleDriveClient",
    "DriveFile",
    "DrivePermission",
]
