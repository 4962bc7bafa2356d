"""
Web-tier controllers.

Each logical user action (create, edit, delete) is carried out through one
or more RemoteItemClient calls. Calls are independent: there is no shared
transaction across them and nothing is rolled back when one fails. Every
failure message from every failed call is collected for redisplay.

Brand edit runs three calls, always in this order and regardless of each
other's outcome:
1. update base fields
2. attach categories   (skipped, counted as success, if the add-list is empty)
3. detach categories   (skipped, counted as success, if the remove-list is empty)

State path: pending -> base_attempted -> [add_attempted] -> [remove_attempted] -> succeeded | failed
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, Type, TypeVar

from catalog.schemas.envelope import ResponseEnvelope
from catalog.schemas.items import BrandCategoryDto, BrandDto, CategoryDto, ItemDto
from catalog.web.item_client import RemoteItemClient

logger = logging.getLogger(__name__)

DtoT = TypeVar("DtoT", bound=ItemDto)

NO_RESPONSE = "The item service did not return a usable response."


class StepStatus(str, Enum):
    ok = "ok"
    skipped = "skipped"  # precondition did not hold; counts as success
    failed = "failed"


class EditState(str, Enum):
    pending = "pending"
    base_attempted = "base_attempted"
    add_attempted = "add_attempted"
    remove_attempted = "remove_attempted"
    succeeded = "succeeded"
    failed = "failed"


@dataclass
class StepResult:
    step: str
    status: StepStatus
    error_messages: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status != StepStatus.failed

    @classmethod
    def vacuous(cls, step: str) -> "StepResult":
        return cls(step=step, status=StepStatus.skipped)

    @classmethod
    def from_envelope(cls, step: str, envelope: Optional[ResponseEnvelope]) -> "StepResult":
        if envelope is None:
            return cls(step=step, status=StepStatus.failed, error_messages=[NO_RESPONSE])
        if envelope.is_success:
            return cls(step=step, status=StepStatus.ok)
        return cls(step=step, status=StepStatus.failed, error_messages=list(envelope.error_messages))


@dataclass
class WorkflowOutcome(Generic[DtoT]):
    success: bool
    item: DtoT
    item_id: Optional[int] = None
    redirect_to: Optional[str] = None
    error_messages: List[str] = field(default_factory=list)
    steps: List[StepResult] = field(default_factory=list)
    states: List[EditState] = field(default_factory=list)


class ItemController(Generic[DtoT]):
    """Single-call create/edit/delete against one item API resource."""

    def __init__(self, client: RemoteItemClient, relative_url: str, page: str, dto_type: Type[DtoT]):
        self.client = client
        self.relative_url = relative_url
        self.page = page
        self.dto_type = dto_type

    @property
    def envelope_type(self):
        return ResponseEnvelope[self.dto_type]

    def index_url(self) -> str:
        return f"/{self.page}"

    def details_url(self, item_id: int) -> str:
        return f"/{self.page}/details/{item_id}"

    def index(self, access_token: Optional[str] = None) -> List[DtoT]:
        response = self.client.get(self.relative_url, ResponseEnvelope[List[self.dto_type]], access_token)
        if response is None or not response.is_success:
            logger.warning(f"Listing {self.relative_url} failed")
            return []
        return response.result or []

    def details(self, item_id: int, access_token: Optional[str] = None) -> Optional[DtoT]:
        response = self.client.get(f"{self.relative_url}/{item_id}", self.envelope_type, access_token)
        if response is None or not response.is_success:
            return None
        return response.result

    def create(self, dto: DtoT, access_token: Optional[str] = None) -> WorkflowOutcome[DtoT]:
        response = self.client.create_item(self.relative_url, dto, self.envelope_type, access_token)
        step = StepResult.from_envelope("create", response)
        created_id = response.result.id if step.succeeded and response.result is not None else None
        if step.succeeded and not created_id:
            step = StepResult(step="create", status=StepStatus.failed, error_messages=[NO_RESPONSE])
        return self._resolve(dto, [step], item_id=created_id)

    def edit(self, dto: DtoT, access_token: Optional[str] = None) -> WorkflowOutcome[DtoT]:
        response = self.client.update_item(self.relative_url, dto, self.envelope_type, access_token)
        return self._resolve(dto, [StepResult.from_envelope("update", response)], item_id=dto.id)

    def delete(self, item_id: int, access_token: Optional[str] = None) -> WorkflowOutcome[Optional[DtoT]]:
        response = self.client.delete_item(self.relative_url, item_id, ResponseEnvelope[None], access_token)
        step = StepResult.from_envelope("delete", response)
        outcome = self._resolve(None, [step], item_id=item_id)
        if outcome.success:
            outcome.redirect_to = self.index_url()
        return outcome

    def _resolve(
        self,
        item,
        steps: List[StepResult],
        item_id: Optional[int] = None,
        states: Optional[List[EditState]] = None,
    ) -> WorkflowOutcome:
        success = all(step.succeeded for step in steps)
        errors = [message for step in steps for message in step.error_messages]
        if not success:
            logger.info(f"{self.page} action failed: {errors}")
        return WorkflowOutcome(
            success=success,
            item=item,
            item_id=item_id,
            redirect_to=self.details_url(item_id) if success and item_id else None,
            error_messages=errors,
            steps=steps,
            states=states or [],
        )


class CategoryController(ItemController[CategoryDto]):
    def __init__(self, client: RemoteItemClient):
        super().__init__(client, "categories", "category", CategoryDto)


class BrandController(ItemController[BrandDto]):
    def __init__(self, client: RemoteItemClient):
        super().__init__(client, "brands", "brand", BrandDto)

    def create(self, dto: BrandDto, access_token: Optional[str] = None) -> WorkflowOutcome[BrandDto]:
        request = dto
        if dto.category_id_add:
            request = dto.model_copy(
                update={
                    "brand_categories": [
                        BrandCategoryDto(brand_id=0, category_id=category_id) for category_id in dto.category_id_add
                    ]
                }
            )
        outcome = super().create(request, access_token)
        outcome.item = dto
        return outcome

    def edit(self, dto: BrandDto, access_token: Optional[str] = None) -> WorkflowOutcome[BrandDto]:
        states = [EditState.pending]
        steps: List[StepResult] = []

        response = self.client.update_item(self.relative_url, dto, self.envelope_type, access_token)
        steps.append(StepResult.from_envelope("update", response))
        states.append(EditState.base_attempted)

        if dto.category_id_add:
            response = self.client.update_item(
                f"{self.relative_url}/addcat/{dto.id}", dto.category_id_add, self.envelope_type, access_token
            )
            steps.append(StepResult.from_envelope("add_categories", response))
            states.append(EditState.add_attempted)
        else:
            steps.append(StepResult.vacuous("add_categories"))

        if dto.category_id_remove:
            response = self.client.update_item(
                f"{self.relative_url}/remcat/{dto.id}", dto.category_id_remove, self.envelope_type, access_token
            )
            steps.append(StepResult.from_envelope("remove_categories", response))
            states.append(EditState.remove_attempted)
        else:
            steps.append(StepResult.vacuous("remove_categories"))

        outcome = self._resolve(dto, steps, item_id=dto.id, states=states)
        outcome.states.append(EditState.succeeded if outcome.success else EditState.failed)
        return outcome
