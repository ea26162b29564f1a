"""Repository resolution and jar download."""

from .downloader import ArtifactDownloader, publish_atomically
from .repositories import RepositoryRegistry
from .resolver import ArtifactResolver, SnapshotVersion
from .transport import build_client, file_url_to_path, is_file_url, read_file_url

__all__ = [
    "ArtifactDownloader",
    "ArtifactResolver",
    "RepositoryRegistry",
    "SnapshotVersion",
    "build_client",
    "file_url_to_path",
    "is_file_url",
    "publish_atomically",
    "read_file_url",
]
