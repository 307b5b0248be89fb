from ipfs_relay.services.ipfs.uploader import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    IPFSFile,
    IPFSUploader,
    UploadError,
    prepare_file,
    prepare_files,
)

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "IPFSFile",
    "IPFSUploader",
    "UploadError",
    "prepare_file",
    "prepare_files",
]
