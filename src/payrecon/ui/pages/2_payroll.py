import streamlit as st
from payrecon.api.schemas.ledger import PaymentCommitRequest
from payrecon.domain.display import format_hours_minutes
from payrecon.domain.enums import PaymentMethod, PaymentStatus, PeriodSelection
from payrecon.ui.api_client import get_client, APIError
from payrecon.ui.state import init_session, period_picker

st.title("Payroll")
init_session()

client = get_client()
period = period_picker()

try:
    data = client.get_payroll(period)
except APIError as e:
    # Fail closed: never show partial payroll.
    st.error(f"Failed to load payroll data: {e.detail}")
    st.stop()

window = data.window
st.caption(f"{window.start:%a %b %d} – {window.display_end:%a %b %d, %Y}")

# ------------------------------------------------------------------
# 1. Summary Metrics
# ------------------------------------------------------------------
c1, c2, c3, c4 = st.columns(4)
c1.metric("Employees", len(data.employees))
c2.metric("Total Hours", format_hours_minutes(data.total_hours))
c3.metric("Total Payroll", f"${data.total_payroll:,.2f}")
c4.metric("Paid", f"{data.paid_count}/{len(data.employees)}")

if data.flagged_activity:
    with st.expander(f"⚠️ Flagged activity ({len(data.flagged_activity)})"):
        st.table([
            {
                "Employee": f.employee_name,
                "Day": f"{f.day_name} {f.date:%m/%d}",
                "In": f.clock_in,
                "Out": f.clock_out,
                "Hours": f"{f.hours_worked:.2f}",
                "Reason": f.reason,
            }
            for f in data.flagged_activity
        ])

st.divider()

if not data.employees:
    st.info("No employees with hours in this period.")
    st.stop()

if window.selection is PeriodSelection.THIS and not any(e.quick_pay for e in data.employees):
    st.info("This week is still open. Payments can be recorded once it has ended.")

# ------------------------------------------------------------------
# 2. Per-Employee Settlement
# ------------------------------------------------------------------
_STATUS_ICON = {
    PaymentStatus.PAID: "✅",
    PaymentStatus.PARTIAL: "🟡",
    PaymentStatus.UNPAID: "⬜",
}

for emp in data.employees:
    label = (
        f"{_STATUS_ICON[emp.status]} {emp.name} — {format_hours_minutes(emp.total_hours)}"
        f" — ${emp.total_pay:,.2f}"
    )
    with st.expander(label):
        if emp.has_incomplete_shifts:
            st.warning("Open shift: employee is still clocked in or missed a clock-out.")

        if not emp.arrangements:
            st.info("No active pay rate.")
            continue

        st.table([
            {
                "Schedule": a.pay_schedule.value,
                "Tax": a.tax_classification.value,
                "Hours": f"{a.hours:.2f}",
                "Rate": f"${a.rate:,.2f}",
                "Amount": f"${a.amount:,.2f}",
                "Status": a.status.value,
                "Paid": f"${a.paid_amount:,.2f}" if a.paid_amount is not None else "",
            }
            for a in emp.allocations
        ])

        for q in emp.quick_pay:
            with st.form(f"pay_{emp.employee_id}_{q.arrangement_id}"):
                st.write(f"Estimated ${q.estimated_amount:,.2f} for {q.hours:.2f}h at ${q.rate:,.2f}")
                c1, c2, c3 = st.columns(3)
                amount = c1.number_input(
                    "Amount", min_value=0.0, value=float(q.suggested_amount), step=1.0,
                )
                methods = list(PaymentMethod)
                method = c2.selectbox(
                    "Method", methods, index=methods.index(q.payment_method),
                    format_func=lambda m: m.value,
                )
                check_number = c3.text_input("Check #")
                notes = st.text_input("Notes")
                if st.form_submit_button("Mark Paid"):
                    try:
                        client.commit_payment(PaymentCommitRequest(
                            employee_id=emp.employee_id,
                            arrangement_id=q.arrangement_id,
                            pay_period_start=window.start,
                            pay_period_end=window.end,
                            hours_worked=q.hours,
                            hourly_rate=q.rate,
                            gross_amount=amount,
                            payment_method=method,
                            check_number=check_number or None,
                            notes=notes or None,
                        ))
                        st.success("Payment recorded.")
                        st.rerun()
                    except APIError as e:
                        st.error(f"Failed to record payment: {e.detail}")
