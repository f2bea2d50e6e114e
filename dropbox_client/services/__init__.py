"""
Business logic services for Dropbox.
"""

from dropbox_client.services.auth_service import AuthService
from dropbox_client.services.file_service import FileService
from dropbox_client.services.folder_service import FolderService

__all__ = [
    "AuthService",
    "FileService",
    "FolderService",
]
