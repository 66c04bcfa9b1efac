"""
Flat-file document storage.

Every document is one file directly inside the data directory, named by its
filename (extension included). There is no index and no metadata: the
directory listing *is* the document list.
"""

import os
from typing import List

from werkzeug.security import safe_join

from config.improved_logging_config import get_smart_logger, LogCategory

logger = get_smart_logger(__name__, LogCategory.STORAGE)

INVALID_NAME_MESSAGE = 'A filename with .txt or .md file extension is required.'


class DocumentError(Exception):
    """Base error for document storage failures"""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name
        self.message = message


class DocumentNotFound(DocumentError):
    def __init__(self, name: str):
        super().__init__(name, f'{name} does not exist.')


class InvalidDocumentName(DocumentError):
    pass


class DocumentStore:
    """Documents stored as plain files in a single directory"""

    allowed_extensions = ('.txt', '.md')
    markdown_extensions = ('.md',)

    def __init__(self, data_path: str):
        self.data_path = data_path

    def _ensure_directory(self):
        os.makedirs(self.data_path, exist_ok=True)

    def _path_for(self, name: str):
        """Resolve a document name to its file path, or None if it escapes the directory"""
        if not name or '/' in name or '\\' in name:
            return None
        return safe_join(self.data_path, name)

    def list_documents(self) -> List[str]:
        self._ensure_directory()
        return sorted(
            entry.name for entry in os.scandir(self.data_path)
            if entry.is_file() and not entry.name.startswith('.')
        )

    def exists(self, name: str) -> bool:
        path = self._path_for(name)
        return path is not None and os.path.isfile(path)

    def is_markdown(self, name: str) -> bool:
        return os.path.splitext(name)[1].lower() in self.markdown_extensions

    def validate_new_name(self, name: str) -> str:
        """
        Check a requested filename for a new document.

        Returns the stripped name. Raises InvalidDocumentName when the name is
        empty, has no .txt/.md extension, is hidden, or is already taken.
        """
        name = (name or '').strip()
        extension = os.path.splitext(name)[1]
        if (not name or name.startswith('.')
                or extension not in self.allowed_extensions
                or self._path_for(name) is None):
            raise InvalidDocumentName(name, INVALID_NAME_MESSAGE)
        if self.exists(name):
            raise InvalidDocumentName(name, f'{name} already exists.')
        return name

    def read(self, name: str) -> str:
        if not self.exists(name):
            raise DocumentNotFound(name)
        # Bytes that are not UTF-8 come back as U+FFFD
        with open(self._path_for(name), encoding='utf-8', errors='replace') as f:
            return f.read()

    def create(self, name: str) -> str:
        name = self.validate_new_name(name)
        self._ensure_directory()
        with open(self._path_for(name), 'w', encoding='utf-8'):
            pass
        logger.storage_operation('create', name)
        return name

    def write(self, name: str, content: str):
        if not self.exists(name):
            raise DocumentNotFound(name)
        # newline='' keeps the line endings exactly as submitted
        with open(self._path_for(name), 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        logger.storage_operation('write', name)

    def delete(self, name: str):
        if not self.exists(name):
            raise DocumentNotFound(name)
        os.remove(self._path_for(name))
        logger.storage_operation('delete', name)
