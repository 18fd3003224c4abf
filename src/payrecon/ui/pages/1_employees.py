import streamlit as st
from payrecon.api.schemas.employees import EmployeeCreate
from payrecon.api.schemas.pay_rates import PayRateCreate
from payrecon.domain.enums import PaymentMethod, PaySchedule, TaxClassification
from payrecon.ui.api_client import get_client, APIError
from payrecon.ui.state import init_session, get_employee_id, set_employee_id

st.title("Employees & Pay Rates")
init_session()

client = get_client()

# --- Create New ---
st.subheader("Add Employee")
with st.form("new_employee_form"):
    c1, c2, c3 = st.columns(3)
    first_name = c1.text_input("First Name")
    last_name = c2.text_input("Last Name")
    role = c3.text_input("Role", value="Staff")
    submitted = st.form_submit_button("Add Employee")

    if submitted and first_name:
        try:
            emp = client.create_employee(
                EmployeeCreate(first_name=first_name, last_name=last_name or None, role=role or "Staff")
            )
            st.success(f"Added {emp.display_name} (ID: {emp.id})")
            set_employee_id(emp.id)
            st.rerun()
        except APIError as e:
            st.error(f"Failed to add employee: {e.detail}")

st.divider()

# --- Directory ---
st.subheader("Directory")
try:
    employees = client.list_employees().items
except APIError as e:
    st.error(f"Failed to load employees: {e.detail}")
    st.stop()

if not employees:
    st.info("No employees yet. Add one above.")
    st.stop()

for emp in employees:
    col1, col2, col3 = st.columns([4, 2, 2])
    col1.write(f"**{emp.display_name}**" + ("" if emp.active else " _(inactive)_"))
    col2.write(emp.role)
    is_selected = get_employee_id() == emp.id
    if col3.button("Selected" if is_selected else "Select", key=f"emp_{emp.id}", disabled=is_selected):
        set_employee_id(emp.id)
        st.rerun()

employee_id = get_employee_id()
if not employee_id:
    st.sidebar.warning("No Employee Selected")
    st.stop()

st.divider()

# --- Pay rates for the selected employee ---
st.subheader("Pay Rates")

try:
    rates = client.list_pay_rates(employee_id)
    active = {r.id for r in client.list_pay_rates(employee_id, active_only=True).items}
except APIError as e:
    st.error(f"Failed to load pay rates: {e.detail}")
    st.stop()

if rates.items:
    st.table([
        {
            "ID": r.id,
            "Rate": f"${r.rate:,.2f}",
            "Schedule": r.pay_schedule.value,
            "Tax": r.tax_classification.value,
            "Method": r.payment_method.value,
            "Effective": r.effective_date.isoformat(),
            "Active": "✅" if r.id in active else "",
        }
        for r in rates.items
    ])
else:
    st.info("No pay rates on file.")

with st.form("new_rate_form"):
    c1, c2, c3, c4 = st.columns(4)
    rate = c1.number_input("Hourly Rate", min_value=0.0, step=0.5)
    schedule = c2.selectbox("Schedule", list(PaySchedule), format_func=lambda s: s.value)
    tax = c3.selectbox("Tax", list(TaxClassification), format_func=lambda t: t.value)
    method = c4.selectbox("Method", list(PaymentMethod), format_func=lambda m: m.value)
    if st.form_submit_button("Save Rate"):
        if rate <= 0:
            st.error("Rate must be greater than zero.")
        else:
            try:
                client.set_pay_rate(employee_id, PayRateCreate(
                    rate=rate, pay_schedule=schedule, tax_classification=tax, payment_method=method,
                ))
                st.success("Rate saved.")
                st.rerun()
            except APIError as e:
                st.error(f"Failed to save rate: {e.detail}")
