# Filename: fileshare/utils.py
from fastapi import HTTPException, status

from .errors import Outcome, Result

STATUS_BY_OUTCOME = {
    Outcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.PARENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    Outcome.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    Outcome.IO_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_result(result: Result, io_detail: str = "Failed to save") -> None:
    if result.ok:
        return
    if result.outcome is Outcome.IO_ERROR:
        raise HTTPException(status_code=STATUS_BY_OUTCOME[result.outcome], detail=io_detail)
    raise HTTPException(status_code=STATUS_BY_OUTCOME[result.outcome], detail=result.detail or result.outcome.value)


def ensure_link_dirs_allowed(allowed: bool) -> None:
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Link directories are not allowed by server configuration",
        )
