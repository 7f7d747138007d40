"""
Shared fixtures for the unit tests.

MemoryFileSystem is an in-memory FileSystem whose tree is a nested dict
(dicts are directories, bytes are file contents, None is a special
file such as a FIFO). It records how many
listings and reads were in progress at once.
"""

import errno
import threading
import time

import pytest

from bytefind.models.events import DirectoryEntry
from bytefind.tools.fs import FileSystem


class MemoryFileSystem(FileSystem):
    """In-memory filesystem with optional failures and artificial latency."""
    
    def __init__(self, tree, unreadable=(), delay=0.0):
        self.tree = tree
        self.unreadable = set(unreadable)
        self.delay = delay
        self._lock = threading.Lock()
        self.active = {'list': 0, 'read': 0}
        self.peak = {'list': 0, 'read': 0}
        self.calls = {'list': 0, 'read': 0}
    
    def _enter(self, kind):
        with self._lock:
            self.calls[kind] += 1
            self.active[kind] += 1
            self.peak[kind] = max(self.peak[kind], self.active[kind])
        if self.delay:
            time.sleep(self.delay)
    
    def _exit(self, kind):
        with self._lock:
            self.active[kind] -= 1
    
    def _node(self, path):
        node = self.tree
        for part in path.split('/'):
            if part in ('', '.'):
                continue
            if not isinstance(node, dict) or part not in node:
                raise FileNotFoundError(errno.ENOENT, 'No such file or directory', path)
            node = node[part]
        return node
    
    def _list(self, directory):
        self._enter('list')
        try:
            node = self._node(directory)
            if not isinstance(node, dict):
                raise NotADirectoryError(errno.ENOTDIR, 'Not a directory', directory)
            return [DirectoryEntry(name=name,
                                   is_dir=isinstance(value, dict),
                                   is_file=isinstance(value, bytes))
                    for name, value in node.items()]
        finally:
            self._exit('list')
    
    def _read(self, path):
        self._enter('read')
        try:
            if path in self.unreadable:
                raise PermissionError(errno.EACCES, 'Permission denied', path)
            node = self._node(path)
            if isinstance(node, dict):
                raise IsADirectoryError(errno.EISDIR, 'Is a directory', path)
            return node
        finally:
            self._exit('read')


@pytest.fixture
def memory_fs():
    """Factory for MemoryFileSystem instances."""
    return MemoryFileSystem
