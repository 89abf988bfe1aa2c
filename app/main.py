"""
Streamlit Frontend for Expense Tracker

The screen a user interacts with: a form to add or edit expenses,
filter buttons, a summary box and the list of expenses.

DESIGN PRINCIPLES:
1. The screen holds no business logic; it only dispatches commands
2. Every button maps to exactly one view-model command
3. Store failures are shown, never hidden
"""

import asyncio

import streamlit as st

from expense_tracker.config import get_settings
from expense_tracker.models import (
    CancelEdit,
    Delete,
    Expense,
    FilterMode,
    SetFilter,
    StartEdit,
)
from expense_tracker.orchestrator import (
    ExpenseViewModel,
    create_storage,
    create_view_model,
)
from expense_tracker.services.storage import StorageError


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💵",
    layout="centered",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_storage():
    """Open the database once per server process; sessions share it."""
    storage = create_storage()
    run_async(storage.create_table())
    return storage


def get_view_model() -> ExpenseViewModel:
    """Return this session's view model, creating and loading it on first use."""
    if "view_model" not in st.session_state:
        view_model = create_view_model(get_storage())
        run_async(view_model.load())
        st.session_state.view_model = view_model
    if "form_version" not in st.session_state:
        st.session_state.form_version = 0
    return st.session_state.view_model


def bump_form_version() -> None:
    """Force the form widgets to pick up the view model's form values."""
    st.session_state.form_version += 1


def run_command(view_model: ExpenseViewModel, command) -> None:
    """Dispatch a command and surface store failures."""
    try:
        run_async(view_model.dispatch(command))
    except StorageError as e:
        st.error(f"Could not reach the expense database: {e}")
        st.stop()


def money(amount: float) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    try:
        view_model = get_view_model()
    except StorageError as e:
        st.error(f"Failed to open the expense database: {e}")
        return

    st.title("Student Expense Tracker")

    render_filter_row(view_model)
    render_form(view_model)
    render_summary(view_model)
    render_expense_list(view_model)

    st.caption("Enter your expenses and they'll be saved locally with SQLite.")


def render_filter_row(view_model: ExpenseViewModel):
    """Render the All / This Week / This Month buttons."""
    columns = st.columns(len(FilterMode))
    for column, mode in zip(columns, FilterMode):
        with column:
            if st.button(
                mode.label,
                key=f"filter_{mode.value}",
                type="primary" if view_model.filter_mode == mode else "secondary",
                use_container_width=True,
            ):
                run_command(view_model, SetFilter(mode=mode))
                st.rerun()


def render_form(view_model: ExpenseViewModel):
    """Render the add/edit form."""
    form = view_model.form
    version = st.session_state.form_version

    with st.form(f"expense_form_{version}"):
        amount = st.text_input(
            "Amount",
            value=form.amount,
            placeholder="Amount (e.g. 12.50)",
        )
        category = st.text_input(
            "Category",
            value=form.category,
            placeholder="Category (Food, Books...)",
        )
        note = st.text_input(
            "Note",
            value=form.note,
            placeholder="Note (optional)",
        )
        submitted = st.form_submit_button(form.submit_label, type="primary")

    if submitted:
        view_model.update_form(amount=amount, category=category, note=note)
        try:
            accepted = run_async(view_model.submit_form())
        except StorageError as e:
            st.error(f"Could not save the expense: {e}")
            return
        if accepted:
            bump_form_version()
            st.rerun()

    if form.is_editing:
        if st.button("Cancel Edit"):
            run_command(view_model, CancelEdit())
            bump_form_version()
            st.rerun()


def render_summary(view_model: ExpenseViewModel):
    """Render the total and per-category totals for the selected window."""
    summary = view_model.summary()

    with st.container(border=True):
        st.markdown(f"**Total Spending ({summary.filter_label}):**")
        st.markdown(f"### {money(summary.total)}")

        st.markdown("**By Category:**")
        for category, total in summary.by_category.items():
            st.markdown(f"- {category}: {money(total)}")


def render_expense_row(view_model: ExpenseViewModel, expense: Expense):
    """Render one expense with its Edit and Delete buttons."""
    with st.container(border=True):
        info, edit, delete = st.columns([6, 1, 1])
        with info:
            st.markdown(f"**{money(expense.amount)}** · {expense.category}")
            if expense.note:
                st.caption(expense.note)
            st.caption(expense.date_iso)
        with edit:
            if st.button("Edit", key=f"edit_{expense.id}"):
                run_command(view_model, StartEdit(expense_id=expense.id))
                bump_form_version()
                st.rerun()
        with delete:
            if st.button("✕", key=f"delete_{expense.id}"):
                run_command(view_model, Delete(expense_id=expense.id))
                bump_form_version()
                st.rerun()


def render_expense_list(view_model: ExpenseViewModel):
    """Render the filtered expense list."""
    expenses = view_model.filtered_expenses()
    if not expenses:
        st.info("No expenses yet.")
        return

    for expense in expenses:
        render_expense_row(view_model, expense)


if __name__ == "__main__":
    main()
