"""
Filesystem adapter for bytefind.

The search pipeline only needs two capabilities from the filesystem: listing
the entries of a directory and reading a whole file. Failures are reported as
warnings on the module logger and turned into "no entries" / empty content, so
a single unreadable path never stops a traversal.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.events import DirectoryEntry


logger = logging.getLogger(__name__)


class FileSystem(ABC):
    """
    Base class for filesystem adapters.
    
    Subclasses implement _list and _read and may raise OSError from either;
    the public methods own the error policy.
    """
    
    def list_entries(self, directory: str) -> List[DirectoryEntry]:
        """
        List the entries of a directory.
        
        Args:
            directory: Directory path
            
        Returns:
            Entries of the directory, or an empty list if it cannot be listed
        """
        try:
            return self._list(directory)
        except OSError as e:
            logger.warning(str(e))
            return []
    
    def read_all(self, path: str) -> bytes:
        """
        Read the full contents of a file.
        
        Args:
            path: File path
            
        Returns:
            File contents, or empty bytes if the file cannot be read
        """
        content = self.try_read(path)
        return b"" if content is None else content
    
    def try_read(self, path: str) -> Optional[bytes]:
        """Read a file, returning None instead of content if it cannot be read."""
        try:
            return self._read(path)
        except OSError as e:
            logger.warning(str(e))
            return None
    
    @abstractmethod
    def _list(self, directory: str) -> List[DirectoryEntry]:
        """List a directory, raising OSError on failure."""
    
    @abstractmethod
    def _read(self, path: str) -> bytes:
        """Read a file, raising OSError on failure."""


def _is_scannable(entry: os.DirEntry) -> bool:
    """Regular files, and symlinks unless they point at a special file."""
    if entry.is_file():
        return True
    if not entry.is_symlink():
        return False
    if entry.is_dir():
        # Read fails with a diagnostic, the link still counts as visited
        return True
    # Dangling links are read too so the failure is reported
    return not os.path.exists(entry.path)


class LocalFileSystem(FileSystem):
    """
    Adapter over the local operating system filesystem.
    
    Symbolic links are never reported as directories, so a traversal does not
    descend into them and cannot loop; they are read like files instead.
    Special files (FIFOs, sockets, devices) are not scannable, since reading
    them can block forever.
    """
    
    def _list(self, directory: str) -> List[DirectoryEntry]:
        with os.scandir(directory) as it:
            return [DirectoryEntry(name=entry.name,
                                   is_dir=entry.is_dir(follow_symlinks=False),
                                   is_file=_is_scannable(entry))
                    for entry in it]
    
    def _read(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()
