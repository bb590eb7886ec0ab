"""Category, filter, sort and search state behind the storefront views."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

from storefront.api import FilterOptionsProvider
from storefront.constant import ALL_CATEGORY
from storefront.data import is_known_category
from storefront.models import ProductQuery
from storefront.overlays import OverlayController

logger = logging.getLogger(__name__)

Spawn = Callable[[Coroutine[Any, Any, None]], Any]


_background_tasks: set[asyncio.Task] = set()


def _spawn_task(coro: Coroutine[Any, Any, None]) -> asyncio.Task:
    task = asyncio.get_running_loop().create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


class ViewStateCoordinator:
    """Owns the query state handed to the product listing.

    The coordinator never filters or sorts products itself. It keeps the
    active category, the selected filter values, the sort choice and the
    search text, and keeps the available filter options in step with the
    active category.
    """

    def __init__(
        self,
        filter_provider: FilterOptionsProvider,
        overlays: OverlayController,
        spawn: Spawn | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.filter_provider = filter_provider
        self.overlays = overlays
        self.spawn = spawn or _spawn_task
        self.on_change = on_change

        self.active_category = ALL_CATEGORY
        self.selected_filters: dict[str, list[str]] = {}
        self.sort_by = ""
        self.search_query = ""
        self.filter_options: dict[str, list[str]] = {}

        self._initialized = False
        self._refresh_generation = 0

    def initialize(self) -> None:
        """Post-construction hook; the composition root calls it once its views exist."""
        if self._initialized:
            logger.debug("view state already initialized")
            return
        self._initialized = True
        self.overlays.initialize()

    @property
    def filters_visible(self) -> bool:
        return self.active_category != ALL_CATEGORY

    def set_category(self, category: str) -> None:
        if not is_known_category(category):
            raise ValueError(f"Unknown category: {category!r}")

        self.active_category = category
        self.selected_filters = {}
        self.sort_by = ""
        # Options of the previous category must never stay visible.
        self.filter_options = {}
        self._notify_change()
        self.spawn(self.refresh_filter_options())

    def toggle_filter(self, dimension: str, value: str) -> None:
        if dimension not in self.filter_options:
            logger.debug(f"ignoring toggle for unavailable dimension={dimension} category={self.active_category}")
            return

        current = self.selected_filters.get(dimension, [])
        if value in current:
            remaining = [selected for selected in current if selected != value]
        else:
            remaining = [*current, value]

        updated = dict(self.selected_filters)
        if remaining:
            updated[dimension] = remaining
        else:
            updated.pop(dimension, None)
        self.selected_filters = updated
        self._notify_change()

    def set_sort(self, option: str) -> None:
        self.sort_by = option
        self._notify_change()

    def set_search(self, query: str) -> None:
        self.search_query = query
        self._notify_change()

    def clear_all(self) -> None:
        """Reset filters, sort and search; the category is kept."""
        self.selected_filters = {}
        self.sort_by = ""
        self.search_query = ""
        self._notify_change()

    def selected_filter_count(self) -> int:
        return sum(len(values) for values in self.selected_filters.values())

    def is_selected(self, dimension: str, value: str) -> bool:
        return value in self.selected_filters.get(dimension, [])

    def query(self) -> ProductQuery:
        """Snapshot of the parameters handed to the product listing."""
        return ProductQuery(
            category=self.active_category,
            filters={dimension: list(values) for dimension, values in self.selected_filters.items()},
            sort_by=self.sort_by,
            search_query=self.search_query,
        )

    async def refresh_filter_options(self) -> None:
        """Reload filter options for the active category.

        Only the newest request is applied, and only while its category is
        still active, so a slow response cannot overwrite a newer category.
        """
        self._refresh_generation += 1
        generation = self._refresh_generation
        category = self.active_category

        if category == ALL_CATEGORY:
            self._apply_filter_options(generation, category, {})
            return

        try:
            options = await self.filter_provider.get_options(category)
        except Exception as exc:
            logger.warning(f"Failed to load filter options category={category}: {exc}")
            options = {}

        self._apply_filter_options(generation, category, options)

    def _apply_filter_options(self, generation: int, category: str, options: dict[str, list[str]]) -> None:
        if generation != self._refresh_generation or category != self.active_category:
            logger.debug(f"discarding stale filter options category={category} generation={generation}")
            return

        self.filter_options = {dimension: list(values) for dimension, values in options.items()}
        self.selected_filters = {
            dimension: values for dimension, values in self.selected_filters.items() if dimension in self.filter_options
        }
        self._notify_change()

    def _notify_change(self) -> None:
        if self.on_change is not None:
            self.on_change()
