from csssync.index.file_index import DEFAULT_SKIP_DIRS, FileIndex, absolute_path, is_under

__all__ = ["DEFAULT_SKIP_DIRS", "FileIndex", "absolute_path", "is_under"]
