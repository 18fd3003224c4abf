"""Streamlit entry point: ``streamlit run src/payrecon/ui/app.py``.

No ORM, no DB. The backend is reached only through the API client.
"""
import streamlit as st
from payrecon.ui.api_client import get_client
from payrecon.ui.state import init_session, period_picker, PERIOD_LABELS

st.set_page_config(page_title="Payroll", page_icon="💵", layout="wide")
init_session()

st.title("Payroll Reconciliation")

period = period_picker()
client = get_client()

try:
    client.health()
except Exception as e:
    st.error(f"Backend connection failed: {e}")
    st.caption("Start it with `uvicorn payrecon.api.app:create_app --factory`.")
    st.stop()

try:
    window = client.get_window(period)
except Exception as e:
    st.error(f"Failed to load period: {e}")
    st.stop()

st.success("Backend reachable.")
st.write(f"**{PERIOD_LABELS[period]}:** {window.start:%a %b %d} – {window.display_end:%a %b %d, %Y}")
st.write("Use the pages in the sidebar to review payroll, settle arrangements and correct time logs.")
