from pydantic import BaseModel
from typing import Generic, List, TypeVar

T = TypeVar("T")


class PageResult(BaseModel, Generic[T]):
    """
    One page of a list endpoint.

    total_records counts every matching row, not just this page, and is 0
    when nothing matches.
    """
    result_data: List[T] = []
    total_records: int = 0
