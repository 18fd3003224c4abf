"""Session-state helpers for the Streamlit UI.

No ORM, no DB; only reads/writes ``st.session_state``.
"""
import streamlit as st
from typing import Optional

from payrecon.domain.enums import PeriodSelection

PERIOD_LABELS = {
    PeriodSelection.THIS: "This Week",
    PeriodSelection.LAST: "Last Week",
    PeriodSelection.LAST_PAY_PERIOD: "Last Pay Period (2 weeks)",
}


def init_session() -> None:
    """Initialize session state variables."""
    if "period" not in st.session_state:
        st.session_state["period"] = PeriodSelection.THIS
    if "employee_id" not in st.session_state:
        st.session_state["employee_id"] = None


def get_period() -> PeriodSelection:
    return st.session_state.get("period", PeriodSelection.THIS)


def set_period(period: PeriodSelection) -> None:
    st.session_state["period"] = period


def period_picker() -> PeriodSelection:
    """Sidebar radio bound to the shared period selection."""
    options = list(PERIOD_LABELS)
    current = get_period()
    choice = st.sidebar.radio(
        "Period",
        options,
        index=options.index(current),
        format_func=lambda p: PERIOD_LABELS[p],
    )
    if choice != current:
        set_period(choice)
    return choice


def get_employee_id() -> Optional[int]:
    """Get currently selected employee ID."""
    return st.session_state.get("employee_id")


def set_employee_id(employee_id: int) -> None:
    st.session_state["employee_id"] = employee_id
