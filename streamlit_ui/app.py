# app.py
import asyncio
import logging

import streamlit as st

from cash_memo.config import PAYMENT_MODES, load_settings
from cash_memo.config_labels import (
    BUSINESS_CONTACT,
    BUSINESS_NAME,
    CURRENCY_PREFIX,
    FOOTER_SUBTITLE,
    FOOTER_TITLE,
    MSG_SUCCESS_TITLE,
    SIGNATORY,
    TABLE_HEADERS,
)
from cash_memo.editor import AddItem, DeleteItem, UpdateField, UpdateMetadata
from cash_memo.models import NoticeKind
from cash_memo.session import EditingSession
from cash_memo.text_utils import format_amount

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(
    page_title="Cash Memo",
    layout="centered",
    page_icon="🧾",
)

if "session" not in st.session_state:
    st.session_state["session"] = EditingSession.with_defaults(settings)
    st.session_state["form_version"] = 0
    st.session_state["confirm_clear"] = None

session: EditingSession = st.session_state["session"]


# Widget keys carry a version so a clear or a row delete re-seeds every input
# from the memo instead of showing stale widget state.
def _key(name: str) -> str:
    return f"{name}-{st.session_state['form_version']}"


def _refresh_widgets() -> None:
    st.session_state["form_version"] += 1


def _on_metadata(field: str, key: str) -> None:
    value = st.session_state.get(key) or ""
    session.dispatch(UpdateMetadata(field=field, value=value))


def _on_item(index: int, field: str, key: str) -> None:
    session.dispatch(UpdateField(index=index, field=field, value=st.session_state.get(key) or ""))


def _on_add() -> None:
    session.dispatch(AddItem())


def _on_delete(index: int) -> None:
    session.dispatch(DeleteItem(index=index))
    _refresh_widgets()


def _on_clear_requested() -> None:
    st.session_state["confirm_clear"] = session.request_clear()


def _on_clear_resolved(accept: bool) -> None:
    session.resolve_clear(accept)
    st.session_state["confirm_clear"] = None
    if accept:
        _refresh_widgets()


def _on_export(kind: str) -> None:
    if kind == "pdf":
        asyncio.run(session.export_as_document())
    else:
        asyncio.run(session.export_as_image())


# ============================================================
# HEADER
# ============================================================
st.title(BUSINESS_NAME)
for line in BUSINESS_CONTACT:
    st.caption(line)

memo = session.memo

# ============================================================
# BILL TO / BILL DETAILS
# ============================================================
left, right = st.columns(2)
with left:
    st.subheader("Bill To")
    k = _key("customer_name")
    st.text_input(
        "Customer Name:",
        value=memo.customer_name,
        placeholder="Enter customer name",
        key=k,
        on_change=_on_metadata,
        args=("customer_name", k),
    )

with right:
    st.subheader("Bill Details")
    k = _key("bill_date")
    st.text_input(
        "Date:",
        value=memo.bill_date,
        placeholder="YYYY-MM-DD",
        key=k,
        on_change=_on_metadata,
        args=("bill_date", k),
    )
    k = _key("payment_mode")
    st.radio(
        "Payment Mode:",
        PAYMENT_MODES,
        index=PAYMENT_MODES.index(memo.payment_mode) if memo.payment_mode in PAYMENT_MODES else None,
        horizontal=True,
        key=k,
        on_change=_on_metadata,
        args=("payment_mode", k),
    )

# ============================================================
# ITEMS
# ============================================================
st.subheader("Items")
widths = [2, 1, 1, 1, 1]
for col, label in zip(st.columns(widths), TABLE_HEADERS + ("Action",)):
    col.markdown(f"**{label}**")

single_item = len(memo.line_items) == 1
for i, item in enumerate(memo.line_items):
    cols = st.columns(widths)
    for col, field, placeholder in zip(
        cols, ("description", "quantity", "rate"), ("Item description", "0", "0")
    ):
        k = _key(f"item-{i}-{field}")
        col.text_input(
            field,
            value=getattr(item, field),
            placeholder=placeholder,
            key=k,
            label_visibility="collapsed",
            on_change=_on_item,
            args=(i, field, k),
        )
    cols[3].markdown(CURRENCY_PREFIX + format_amount(item.amount))
    cols[4].button(
        "Delete",
        key=_key(f"delete-{i}"),
        disabled=single_item,
        on_click=_on_delete,
        args=(i,),
    )

# ============================================================
# TOTALS / SIGNATURE
# ============================================================
st.markdown(f"Subtotal: **{CURRENCY_PREFIX}{format_amount(memo.subtotal)}**")
st.markdown(f"### Total Amount: {CURRENCY_PREFIX}{format_amount(memo.total)}")
st.markdown(f"*{SIGNATORY}*  \n{memo.signature_date()}")

# ============================================================
# NOTICES
# ============================================================
flash = session.notices.flash_message
if flash:
    st.error(flash)

notice = session.notices.pop_modal()
while notice is not None:
    if notice.title == MSG_SUCCESS_TITLE:
        st.success(f"**{notice.title}**: {notice.message}")
    else:
        st.error(f"**{notice.title}**: {notice.message}")
    notice = session.notices.pop_modal()

confirm = st.session_state.get("confirm_clear")
if confirm is not None and confirm.kind == NoticeKind.CONFIRM:
    st.warning(f"**{confirm.title}**: {confirm.message}")
    yes, no = st.columns(2)
    yes.button("Clear", type="primary", on_click=_on_clear_resolved, args=(True,))
    no.button("Cancel", on_click=_on_clear_resolved, args=(False,))

# ============================================================
# ACTIONS
# ============================================================
st.subheader("📋 Actions")
busy = session.coordinator.in_progress
a, b, c, d = st.columns(4)
a.button("Add Item", on_click=_on_add)
b.button("Clear All", on_click=_on_clear_requested)
c.button(
    "Saving..." if busy else "Save PDF",
    disabled=not session.can_export,
    on_click=_on_export,
    args=("pdf",),
)
d.button(
    "Saving..." if busy else "Save JPG",
    disabled=not session.can_export,
    on_click=_on_export,
    args=("jpg",),
)

st.divider()
st.markdown(f"**{FOOTER_TITLE}**")
st.caption(FOOTER_SUBTITLE)
