from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageWindow:
    page: int
    limit: int
    offset: int

    def has_more(self, total: int) -> bool:
        return self.offset + self.limit < total


def resolve_page(page: int | None, limit: int | None, *, default_limit: int, max_limit: int) -> PageWindow:
    page_value = page if page and page > 0 else 1
    limit_value = limit if limit and limit > 0 else default_limit
    limit_value = min(limit_value, max_limit)
    return PageWindow(page=page_value, limit=limit_value, offset=(page_value - 1) * limit_value)


def clamp_offset_limit(offset: int | None, limit: int | None, *, default_limit: int, max_limit: int) -> tuple[int, int]:
    offset_value = offset if offset and offset > 0 else 0
    limit_value = limit if limit and limit > 0 else default_limit
    return offset_value, min(limit_value, max_limit)
