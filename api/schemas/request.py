"""
Request parameter types for API endpoints.
"""
from typing import Annotated
from fastapi import Path


FileIdPath = Annotated[
    str,
    Path(
        min_length=1,
        max_length=256,
        description="Google Drive file id",
        examples=["1Zx3k9Qw_abcDEFghiJKLmnopQRsT"]
    )
]
