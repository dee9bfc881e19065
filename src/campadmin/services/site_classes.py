"""Site class admin actions: create, edit, inline rate edit with undo, delete"""

import logging
from collections import Counter
from typing import Iterable, List, Optional

from ..core.errors import (
    ActionFailed,
    ConfirmationRequired,
    NotFound,
    UpstreamError,
    UpstreamUnavailable,
)
from ..data.cache import QueryCache
from ..data.client import CampreservClient
from ..forms.site_class_form import (
    FormMode,
    SiteClassForm,
    cents_to_dollars,
    dollars_to_cents,
    form_to_payload,
)
from ..models.site import Site
from ..models.site_class import SiteClass, SiteClassListResponse, SiteClassSummary
from ..models.toast import Toast, ToastAction
from .undo import UndoRegistry

logger = logging.getLogger(__name__)

CLASSES_KEY = "site-classes"
SITES_KEY = "sites"

UPSTREAM_ERRORS = (UpstreamError, UpstreamUnavailable)


def sites_per_class(sites: Iterable[Site]) -> dict[str, int]:
    """Count sites by assigned class; unassigned sites are ignored"""
    return dict(Counter(s.site_class_id for s in sites if s.site_class_id))


def delete_prompt(name: str, site_count: int) -> str:
    """Confirmation text for deleting a class with site_count dependent sites"""
    impact = ""
    if site_count > 0:
        noun = "site" if site_count == 1 else "sites"
        pronoun = "its" if site_count == 1 else "their"
        impact = f"\n\n{site_count} {noun} will lose {pronoun} class assignment."
    return f'Are you sure you want to delete "{name}"?{impact}\n\nThis action cannot be undone.'


class SiteClassService:
    """Mutations go straight to the API; the cached collection for the
    campground is invalidated only after a mutation succeeds."""

    def __init__(self, client: CampreservClient, cache: QueryCache, undo: UndoRegistry):
        self.client = client
        self.cache = cache
        self.undo = undo

    # ============== Queries ==============

    async def list_classes(self, campground_id: str) -> List[SiteClass]:
        return await self.cache.fetch(
            (CLASSES_KEY, campground_id),
            lambda: self.client.get_site_classes(campground_id),
        )

    async def list_sites(self, campground_id: str) -> List[Site]:
        return await self.cache.fetch(
            (SITES_KEY, campground_id),
            lambda: self.client.get_sites(campground_id),
        )

    async def get_class(self, campground_id: str, class_id: str) -> SiteClass:
        classes = await self.list_classes(campground_id)
        site_class = next((c for c in classes if c.id == class_id), None)
        if site_class is None:
            raise NotFound(f"Site class {class_id} not found")
        return site_class

    async def overview(self, campground_id: str) -> SiteClassListResponse:
        classes = await self.list_classes(campground_id)
        counts = sites_per_class(await self.list_sites(campground_id))
        return SiteClassListResponse(
            classes=[SiteClassSummary(site_class=c, site_count=counts.get(c.id, 0)) for c in classes],
            total=len(classes),
            active=sum(1 for c in classes if c.is_active),
        )

    def _invalidate(self, campground_id: str) -> None:
        self.cache.invalidate((CLASSES_KEY, campground_id))

    # ============== Create / edit ==============

    async def create_class(self, campground_id: str, form: SiteClassForm) -> tuple[SiteClass, Toast]:
        """Create a class from form input.

        Raises:
            FormValidationError: submit gate failed, nothing was sent
            ActionFailed: the API rejected or could not take the request
        """
        payload = form_to_payload(form, FormMode.CREATE)
        try:
            created = await self.client.create_site_class(campground_id, payload)
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Create site class failed for campground {campground_id}: {e}")
            raise ActionFailed("Failed to save class", e) from e

        self._invalidate(campground_id)
        logger.info(f"Created site class {created.id} ({created.name}) in {campground_id}")
        return created, Toast(title="Site class created", description="The new site class has been added.")

    async def save_class(self, campground_id: str, class_id: str, form: SiteClassForm) -> tuple[SiteClass, Toast]:
        payload = form_to_payload(form, FormMode.EDIT)
        try:
            updated = await self.client.update_site_class(class_id, payload)
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Update site class {class_id} failed: {e}")
            raise ActionFailed("Failed to save class", e) from e

        self._invalidate(campground_id)
        return updated, Toast(title="Changes saved", description="Site class has been updated.")

    # ============== Inline rate ==============

    async def update_rate(self, campground_id: str, site_class: SiteClass, cents: int) -> Toast:
        """Set a new default rate and return a toast offering undo"""
        previous = site_class.default_rate
        try:
            await self.client.update_site_class(site_class.id, {"defaultRate": cents})
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Inline rate update for {site_class.id} failed: {e}")
            raise ActionFailed("Failed to update rate", e) from e

        self._invalidate(campground_id)

        async def restore() -> Toast:
            return await self._restore_rate(campground_id, site_class.id, previous)

        undo_id = self.undo.register(restore)
        return Toast(
            title="Rate updated",
            description=f"{site_class.name} rate set to ${cents_to_dollars(cents)}",
            action=ToastAction(label="Undo", undo_id=undo_id),
        )

    async def _restore_rate(self, campground_id: str, class_id: str, previous_cents: int) -> Toast:
        try:
            await self.client.update_site_class(class_id, {"defaultRate": previous_cents})
        except UPSTREAM_ERRORS as e:
            raise ActionFailed("Failed to undo rate change", e) from e
        self._invalidate(campground_id)
        return Toast(title="Undone", description=f"Rate reverted to ${cents_to_dollars(previous_cents)}")

    # ============== Delete ==============

    async def delete_impact(self, campground_id: str, class_id: str) -> tuple[SiteClass, int, str]:
        site_class = await self.get_class(campground_id, class_id)
        count = sites_per_class(await self.list_sites(campground_id)).get(class_id, 0)
        return site_class, count, delete_prompt(site_class.name, count)

    async def delete_class(self, campground_id: str, class_id: str, confirmed: bool) -> Toast:
        """Delete a class once the user confirmed the impact prompt.

        Dependent sites are not deleted; they lose their class assignment.

        Raises:
            ConfirmationRequired: confirmed is false; carries the prompt
        """
        _, count, prompt = await self.delete_impact(campground_id, class_id)
        if not confirmed:
            raise ConfirmationRequired(prompt, count)

        try:
            await self.client.delete_site_class(class_id)
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Delete site class {class_id} failed: {e}")
            raise ActionFailed("Failed to delete class", e) from e

        self._invalidate(campground_id)
        self.cache.invalidate((SITES_KEY, campground_id))
        logger.info(f"Deleted site class {class_id}; {count} sites unassigned")
        return Toast(title="Site class deleted", description="The site class has been removed.")


class InlineRateEditor:
    """Quick edit of one row's default rate.

    Enter or blur commits, Escape cancels. Input that is not a non-negative
    number closes the editor without a request.
    """

    def __init__(self, service: SiteClassService, campground_id: str):
        self.service = service
        self.campground_id = campground_id
        self.site_class: Optional[SiteClass] = None
        self.value = ""

    @property
    def editing_id(self) -> Optional[str]:
        return self.site_class.id if self.site_class else None

    def activate(self, site_class: SiteClass) -> str:
        self.site_class = site_class
        self.value = f"{site_class.default_rate_dollars:.2f}"
        return self.value

    def cancel(self) -> None:
        self.site_class = None
        self.value = ""

    async def handle_key(self, key: str) -> Optional[Toast]:
        if key == "Enter":
            return await self.commit()
        if key == "Escape":
            self.cancel()
        return None

    async def blur(self) -> Optional[Toast]:
        return await self.commit()

    async def commit(self) -> Optional[Toast]:
        if self.site_class is None:
            return None
        try:
            cents = dollars_to_cents(self.value)
        except ValueError:
            self.cancel()
            return None

        # Editor stays open if the update raises
        toast = await self.service.update_rate(self.campground_id, self.site_class, cents)
        self.cancel()
        return toast
