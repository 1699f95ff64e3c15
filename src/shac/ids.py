from __future__ import annotations

import hashlib


def compute_content_id(data: bytes) -> str:
    """Compute the content-addressed id of an asset.

    _id = sha1(<bytes>) as 40 lowercase hex characters. Identical content
    always yields the same id, which doubles as the stored filename.
    """

    return hashlib.sha1(data).hexdigest()
