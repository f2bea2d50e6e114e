"""
Dropbox client configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class DropboxConfig:
    """
    Attributes:
        api_url: Base URL for RPC-style endpoints and OAuth.
        content_url: Base URL for upload/download endpoints.
        notify_url: Base URL for the longpoll endpoint.
        timeout: Request timeout in seconds.
        longpoll_margin: Extra seconds added to a longpoll timeout (the server adds jitter).
        user_agent: User-Agent header value.
        upload_read_size: Bytes read from disk per chunk when streaming an upload.
    """

    api_url: str = "https://api.dropboxapi.com"
    content_url: str = "https://content.dropboxapi.com"
    notify_url: str = "https://notify.dropboxapi.com"
    timeout: float = 30.0
    longpoll_margin: float = 90.0
    user_agent: str = "Dropbox-Python-Client/0.1"
    upload_read_size: int = 64 * 1024

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.longpoll_margin < 0:
            msg = "longpoll_margin must be non-negative"
            raise ValueError(msg)
        if self.upload_read_size <= 0:
            msg = "upload_read_size must be positive"
            raise ValueError(msg)
