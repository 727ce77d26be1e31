# cash_memo/editor.py
"""State updates for a :class:`CashMemo`.

Every operation takes the current memo and returns a new one; nothing is
mutated in place. ``reduce`` is the single entry point used by the editing
session, the remaining functions are what it dispatches to.
"""
from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from .config_labels import MSG_MIN_ITEMS
from .errors import ClearNotConfirmed, MinimumItemsViolation
from .models import CashMemo, LineItem

ItemField = Literal["description", "quantity", "rate"]
MetadataField = Literal["customer_name", "bill_date", "payment_mode"]


class UpdateField(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    field: ItemField
    value: str


class UpdateMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: MetadataField
    value: str


class AddItem(BaseModel):
    model_config = ConfigDict(frozen=True)


class DeleteItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int


class ClearAll(BaseModel):
    model_config = ConfigDict(frozen=True)

    confirmed: bool = False


Action = Union[UpdateField, UpdateMetadata, AddItem, DeleteItem, ClearAll]


def _check_index(memo: CashMemo, index: int) -> None:
    if not (0 <= index < len(memo.line_items)):
        raise IndexError(
            f"line item index {index} out of range (0..{len(memo.line_items) - 1})"
        )


def update_field(memo: CashMemo, index: int, field: ItemField, value: str) -> CashMemo:
    _check_index(memo, index)
    items = list(memo.line_items)
    items[index] = items[index].model_copy(update={field: value})
    return memo.model_copy(update={"line_items": tuple(items)})


def update_metadata(memo: CashMemo, field: MetadataField, value: str) -> CashMemo:
    return memo.model_copy(update={field: value})


def add_item(memo: CashMemo) -> CashMemo:
    return memo.model_copy(update={"line_items": memo.line_items + (LineItem(),)})


def delete_item(memo: CashMemo, index: int) -> CashMemo:
    _check_index(memo, index)
    if len(memo.line_items) <= 1:
        raise MinimumItemsViolation(MSG_MIN_ITEMS)
    items = tuple(li for i, li in enumerate(memo.line_items) if i != index)
    return memo.model_copy(update={"line_items": items})


def clear(memo: CashMemo, confirmed: bool = False) -> CashMemo:
    """Reset everything to a blank memo. Irreversible, so it needs confirmation."""
    if not confirmed:
        raise ClearNotConfirmed("clearing the cash memo requires confirmation")
    return CashMemo()


def compute_total(memo: CashMemo) -> float:
    return memo.compute_total()


def reduce(memo: CashMemo, action: Action) -> CashMemo:
    if isinstance(action, UpdateField):
        return update_field(memo, action.index, action.field, action.value)
    if isinstance(action, UpdateMetadata):
        return update_metadata(memo, action.field, action.value)
    if isinstance(action, AddItem):
        return add_item(memo)
    if isinstance(action, DeleteItem):
        return delete_item(memo, action.index)
    if isinstance(action, ClearAll):
        return clear(memo, confirmed=action.confirmed)
    raise TypeError(f"unknown action: {action!r}")
