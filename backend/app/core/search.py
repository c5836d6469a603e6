from sqlalchemy import func

LIKE_ESCAPE = "\\"


def escape_like(keyword: str) -> str:
    """Escape LIKE wildcards so user input is matched literally"""
    return (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_keyword(column, keyword: str):
    """Case-insensitive substring match on a column"""
    return column.ilike(f"%{escape_like(keyword)}%", escape=LIKE_ESCAPE)


def equals_ignore_case(column, value: str):
    """Case-insensitive full-string match on a column"""
    return func.lower(column) == value.lower()


def page_offset(page: int, size: int) -> int:
    return (page - 1) * size
