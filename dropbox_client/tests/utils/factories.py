"""
Builders for API payloads used across tests.
"""

from typing import Any


def make_file_entry(**overrides: Any) -> dict[str, Any]:
    """File metadata as returned by the API, with ``overrides`` applied."""
    entry = {
        ".tag": "file",
        "id": "id:a4ayc_80_OEAAAAAAAAAXw",
        "name": "Prime_Numbers.txt",
        "client_modified": "2015-05-12T15:50:38Z",
        "server_modified": "2015-05-12T15:50:38Z",
        "rev": "a1c10ce0dd78",
        "size": 7212,
        "path_lower": "/homework/math/prime_numbers.txt",
        "path_display": "/Homework/math/Prime_Numbers.txt",
        "is_downloadable": True,
        "content_hash": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    }
    entry.update(overrides)
    return entry
