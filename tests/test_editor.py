from __future__ import annotations

import pytest

from cash_memo.editor import (
    AddItem,
    ClearAll,
    DeleteItem,
    UpdateField,
    UpdateMetadata,
    add_item,
    clear,
    compute_total,
    delete_item,
    reduce,
    update_field,
    update_metadata,
)
from cash_memo.errors import ClearNotConfirmed, MinimumItemsViolation
from cash_memo.models import CashMemo, LineItem


def test_amount_consistent_after_each_edit():
    memo = CashMemo()
    edits = [
        ("quantity", "2"),
        ("rate", "15"),
        ("quantity", "2.5"),
        ("rate", "oops"),
        ("rate", "-4"),
        ("quantity", ""),
        ("quantity", "10"),
    ]
    for field, value in edits:
        memo = update_field(memo, 0, field, value)
        li = memo.line_items[0]
        q = float(li.quantity) if li.quantity not in ("", "oops") else 0.0
        r = float(li.rate) if li.rate not in ("", "oops") else 0.0
        assert li.amount == pytest.approx(q * r)


def test_update_field_returns_new_memo():
    memo = CashMemo()
    updated = update_field(memo, 0, "description", "Tiffin")
    assert updated is not memo
    assert updated.line_items is not memo.line_items
    assert memo.line_items[0].description == ""
    assert updated.line_items[0].description == "Tiffin"


def test_update_field_out_of_range():
    with pytest.raises(IndexError):
        update_field(CashMemo(), 1, "rate", "10")
    with pytest.raises(IndexError):
        update_field(CashMemo(), -1, "rate", "10")


def test_update_metadata():
    memo = update_metadata(CashMemo(), "customer_name", "Asha")
    memo = update_metadata(memo, "payment_mode", "UPI")
    assert memo.customer_name == "Asha"
    assert memo.payment_mode == "UPI"


def test_add_item_appends_blank():
    memo = add_item(add_item(CashMemo()))
    assert len(memo.line_items) == 3
    assert memo.line_items[-1] == LineItem()


def test_delete_item_keeps_order():
    memo = CashMemo(
        line_items=(
            LineItem(description="a"),
            LineItem(description="b"),
            LineItem(description="c"),
        )
    )
    memo = delete_item(memo, 1)
    assert [li.description for li in memo.line_items] == ["a", "c"]


def test_delete_last_item_is_refused():
    memo = CashMemo(line_items=(LineItem(description="only"),))
    with pytest.raises(MinimumItemsViolation):
        delete_item(memo, 0)
    assert memo.line_items == (LineItem(description="only"),)


def test_clear_requires_confirmation(ready_memo):
    with pytest.raises(ClearNotConfirmed):
        clear(ready_memo)
    assert clear(ready_memo, confirmed=True) == CashMemo()


def test_compute_total_matches_method(ready_memo):
    assert compute_total(ready_memo) == ready_memo.compute_total() == 1600


def test_reduce_dispatches_every_action():
    memo = CashMemo()
    memo = reduce(memo, UpdateMetadata(field="customer_name", value="Ramesh"))
    memo = reduce(memo, AddItem())
    memo = reduce(memo, UpdateField(index=1, field="quantity", value="3"))
    memo = reduce(memo, UpdateField(index=1, field="rate", value="7"))
    memo = reduce(memo, DeleteItem(index=0))
    assert memo.customer_name == "Ramesh"
    assert len(memo.line_items) == 1
    assert memo.line_items[0].amount == 21
    assert reduce(memo, ClearAll(confirmed=True)) == CashMemo()


def test_update_action_rejects_unknown_field():
    with pytest.raises(ValueError):
        UpdateField(index=0, field="amount", value="5")
