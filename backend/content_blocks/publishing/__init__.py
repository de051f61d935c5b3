from .filesystem import FilesystemPublisher

__all__ = ["FilesystemPublisher"]
