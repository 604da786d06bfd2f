from story_discovery.pagination.coordinator import (
    DESKTOP_PAGE_SIZE,
    JUMP_SIZE,
    MOBILE_BREAKPOINT,
    MOBILE_PAGE_SIZE,
    PaginationCoordinator,
    derive_pagination,
)

__all__ = [
    "DESKTOP_PAGE_SIZE",
    "JUMP_SIZE",
    "MOBILE_BREAKPOINT",
    "MOBILE_PAGE_SIZE",
    "PaginationCoordinator",
    "derive_pagination",
]
