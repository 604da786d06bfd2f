"""Pagination state for single and fanned-out result sets."""

import dataclasses
import logging
import math

from story_discovery.data import ExecutionResult, PaginationState

logger = logging.getLogger(__name__)

MOBILE_BREAKPOINT = 640
MOBILE_PAGE_SIZE = 6
DESKTOP_PAGE_SIZE = 20
JUMP_SIZE = 5


def _page_count(total_items: int, page_size: int) -> int:
    return max(1, math.ceil(total_items / page_size)) if page_size > 0 else 1


def derive_pagination(
    results: list[ExecutionResult],
    *,
    page_size: int,
    current_page: int = 1,
) -> PaginationState:
    """Derive counts from execution results.

    A single result uses the store's own metadata. Several results (a
    language fan-out) sum their per-language totals and recompute the page
    count from ``page_size``. The displayed stories are the union of the
    same page across languages and are not re-sliced, so only the counts
    are guaranteed, not a uniform number of items per page.

    Args:
        results: Output of the fan-out executor.
        page_size: Items per page requested from each locale.
        current_page: Page being displayed; clamped into range.

    Returns:
        The derived PaginationState.
    """
    if len(results) == 1:
        result = results[0]
        total_items = result.item_count
        total_pages = (
            max(1, result.page_count)
            if result.page_count is not None
            else _page_count(total_items, page_size)
        )
    else:
        total_items = sum(result.item_count for result in results)
        total_pages = _page_count(total_items, page_size)

    return PaginationState(
        current_page=min(max(1, current_page), total_pages),
        page_size=page_size,
        total_pages=total_pages,
        total_items=total_items,
    )


class PaginationCoordinator:
    """Track the current page and a viewport-dependent page size.

    Args:
        mobile_breakpoint: Widths strictly below this are narrow viewports.
        mobile_page_size: Page size on narrow viewports.
        desktop_page_size: Page size on wide viewports.
        jump_size: Pages a jump moves beyond the edge of the visible window.
        mobile_visible_pages: Page links shown on narrow viewports.
        desktop_visible_pages: Page links shown on wide viewports.
        viewport_width: Initial viewport width; None assumes a wide viewport.
    """

    def __init__(
        self,
        *,
        mobile_breakpoint: int = MOBILE_BREAKPOINT,
        mobile_page_size: int = MOBILE_PAGE_SIZE,
        desktop_page_size: int = DESKTOP_PAGE_SIZE,
        jump_size: int = JUMP_SIZE,
        mobile_visible_pages: int = 4,
        desktop_visible_pages: int = 9,
        viewport_width: int | None = None,
    ) -> None:
        self._mobile_breakpoint = mobile_breakpoint
        self._mobile_page_size = mobile_page_size
        self._desktop_page_size = desktop_page_size
        self._jump_size = jump_size
        self._mobile_visible_pages = mobile_visible_pages
        self._desktop_visible_pages = desktop_visible_pages
        self._is_mobile = viewport_width is not None and viewport_width < mobile_breakpoint
        self._state = PaginationState(page_size=self._size_for(self._is_mobile))

    @property
    def state(self) -> PaginationState:
        return self._state

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def current_page(self) -> int:
        return self._state.current_page

    def _size_for(self, is_mobile: bool) -> int:
        return self._mobile_page_size if is_mobile else self._desktop_page_size

    def set_viewport_width(self, width: int) -> bool:
        """Recompute the page size for a new viewport width.

        A changed page size invalidates the current item range, so the
        coordinator goes back to page 1.

        Returns:
            True if the page size changed.
        """
        is_mobile = width < self._mobile_breakpoint
        new_size = self._size_for(is_mobile)
        self._is_mobile = is_mobile
        if new_size == self._state.page_size:
            return False
        logger.info(f"Page size changed from {self._state.page_size} to {new_size}")
        self._state = dataclasses.replace(self._state, page_size=new_size, current_page=1)
        return True

    def reset(self) -> None:
        """Return to page 1 (e.g. after the filters changed)."""
        self._state = dataclasses.replace(self._state, current_page=1)

    def request_page(self, page: int) -> None:
        """Set the page to load next; bounds are enforced once results arrive."""
        self._state = dataclasses.replace(self._state, current_page=max(1, page))

    def apply(self, results: list[ExecutionResult]) -> PaginationState:
        """Derive counts from freshly loaded results and clamp the current page."""
        self._state = derive_pagination(
            results,
            page_size=self._state.page_size,
            current_page=self._state.current_page,
        )
        return self._state

    def go_to(self, page: int) -> int:
        """Move to ``page``, clamped to ``[1, total_pages]``."""
        clamped = min(max(1, page), self._state.total_pages)
        self._state = dataclasses.replace(self._state, current_page=clamped)
        return clamped

    def next_page(self) -> int:
        return self.go_to(self._state.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to(self._state.current_page - 1)

    @property
    def can_jump_back(self) -> bool:
        """Whether pages exist before the visible window."""
        return self._window()[0] > 1

    @property
    def can_jump_forward(self) -> bool:
        """Whether pages exist after the visible window."""
        return self._window()[1] < self._state.total_pages

    def jump_forward(self) -> int:
        """Move ``jump_size`` pages past the end of the visible window."""
        return self.go_to(self._window()[1] + self._jump_size)

    def jump_back(self) -> int:
        """Move ``jump_size`` pages before the start of the visible window."""
        return self.go_to(self._window()[0] - self._jump_size)

    def visible_pages(self) -> list[int]:
        """Page numbers to render as links, centred on the current page where possible."""
        start, end = self._window()
        return list(range(start, end + 1))

    def _window(self) -> tuple[int, int]:
        total = self._state.total_pages
        window = self._mobile_visible_pages if self._is_mobile else self._desktop_visible_pages
        start = max(1, min(self._state.current_page - window // 2, total - window + 1))
        end = min(start + window - 1, total)
        return (start, end)
