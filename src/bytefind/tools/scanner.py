"""
Literal byte scanner for bytefind.
"""

from .fs import FileSystem
from .limiter import ConcurrencyLimiter


class Scanner:
    """Decides whether a file's content contains a literal byte string."""
    
    def __init__(self, fs: FileSystem, file_limiter: ConcurrencyLimiter):
        self.fs = fs
        self.file_limiter = file_limiter
    
    def contains(self, query: bytes, path: str) -> bool:
        """
        Check whether the file at path contains query.
        
        The whole file is read so a match can never straddle a buffer
        boundary. An unreadable file does not match.
        
        Args:
            query: Literal bytes to look for
            path: File to scan
            
        Returns:
            True if query occurs as a contiguous substring of the content
        """
        with self.file_limiter:
            content = self.fs.try_read(path)
        return content is not None and query in content
