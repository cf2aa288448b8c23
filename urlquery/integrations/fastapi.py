"""FastAPI dependency support.

Example:
    app = FastAPI()

    @app.get("/search")
    async def search(query: SearchQuery = Depends(query_dependency(SearchQuery))):
        return {"next": query.to_query_string()}
"""

import logging
from typing import Callable, Type, TypeVar

from fastapi import HTTPException, Request

from urlquery.mapping import from_query_mapping
from urlquery.url import decode_query_string

logger = logging.getLogger(__name__)

T = TypeVar("T")


def query_dependency(result_type: Type[T]) -> Callable[[Request], T]:
    """Create a dependency that builds ``result_type`` from the request query.

    The raw query is split into parameters before each key and value is
    percent-decoded, so ``q=rock%26roll`` reads as ``rock&roll``. Values that
    fail conversion are reported as HTTP 400.

    Args:
        result_type: Class with registered query parameters

    Returns:
        Dependency callable for ``fastapi.Depends``
    """

    def dependency(request: Request) -> T:
        query = decode_query_string(request.url.query)
        try:
            return from_query_mapping(query, result_type)
        except ValueError as e:
            logger.warning(
                f"Invalid query for {result_type.__name__} on {request.url.path}: {e}"
            )
            raise HTTPException(
                status_code=400, detail=f"Invalid query parameter: {e}"
            ) from e

    dependency.__name__ = f"{result_type.__name__}_query_dependency"
    return dependency


__all__ = ["query_dependency"]
