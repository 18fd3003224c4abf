from datetime import datetime

import streamlit as st
from payrecon.api.schemas.timeclock import CorrectionRequest
from payrecon.config import settings
from payrecon.ui.api_client import get_client, APIError
from payrecon.ui.state import init_session, period_picker, get_employee_id, set_employee_id

st.title("Time Logs")
init_session()

client = get_client()
period = period_picker()

try:
    employees = client.list_employees().items
except APIError as e:
    st.error(f"Failed to load employees: {e.detail}")
    st.stop()

if not employees:
    st.info("No employees yet.")
    st.stop()

ids = [e.id for e in employees]
names = {e.id: e.display_name for e in employees}
current = get_employee_id()
employee_id = st.selectbox(
    "Employee", ids, index=ids.index(current) if current in ids else 0,
    format_func=lambda i: names[i],
)
if employee_id != current:
    set_employee_id(employee_id)

# ------------------------------------------------------------------
# 1. Red flags for the period
# ------------------------------------------------------------------
try:
    red = client.list_red_flags(period)
except APIError as e:
    st.error(f"Failed to load red flags: {e.detail}")
    st.stop()

if red.employees:
    with st.expander(f"🚩 Red flags ({red.total_flagged_shifts} shifts)"):
        for emp in red.employees:
            st.write(f"**{emp.name}** — avg shift {emp.average_shift_hours:.1f}h")
            st.table([
                {
                    "Day": f"{s.day_name} {s.date:%m/%d}",
                    "In": s.clock_in,
                    "Out": s.clock_out or "",
                    "Hours": s.hours_display,
                    "Auto clock-out": "yes" if s.flags.is_auto_clock_out else "",
                }
                for s in emp.shifts
            ])

st.divider()

# ------------------------------------------------------------------
# 2. Shifts for the selected employee
# ------------------------------------------------------------------
try:
    shifts = client.list_shifts(employee_id, period)
except APIError as e:
    st.error(f"Failed to load shifts: {e.detail}")
    st.stop()

st.subheader(f"{names[employee_id]} — {shifts.start:%b %d} to {shifts.end:%b %d}")
if shifts.has_incomplete_shifts:
    st.warning("This employee has an open shift.")

if not shifts.items:
    st.info("No clock activity in this period.")
    st.stop()

tz = settings.business_tz
for i, s in enumerate(shifts.items):
    badges = []
    if s.flags.is_incomplete:
        badges.append("open")
    if s.flags.is_auto_clock_out:
        badges.append("auto clock-out")
    if s.flags.is_suspicious:
        badges.append("under 5 min")
    suffix = f"  _({', '.join(badges)})_" if badges else ""
    with st.expander(f"{s.day_name} {s.date:%m/%d}: {s.clock_in} → {s.clock_out or '—'}  {s.hours_display}{suffix}"):
        local_in = s.clock_in_time.astimezone(tz)
        local_out = s.clock_out_time.astimezone(tz) if s.clock_out_time else None
        with st.form(f"correct_{s.clock_in_id}_{i}"):
            c1, c2 = st.columns(2)
            in_time = c1.time_input("Clock in", value=local_in.time(), key=f"in_{i}")
            out_time = c2.time_input(
                "Clock out", value=local_out.time() if local_out else None, key=f"out_{i}",
            )
            if st.form_submit_button("Save Correction"):
                out_day = (local_out or local_in).date()
                payload = CorrectionRequest(
                    clock_in_id=s.clock_in_id,
                    clock_in_time=datetime.combine(local_in.date(), in_time, tzinfo=tz),
                    clock_out_id=s.clock_out_id,
                    clock_out_time=(
                        datetime.combine(out_day, out_time, tzinfo=tz) if out_time else None
                    ),
                )
                try:
                    result = client.apply_corrections(employee_id, payload)
                except APIError as e:
                    st.error(f"Correction rejected: {e.detail}")
                else:
                    if result.success:
                        st.success("Shift updated.")
                        st.rerun()
                    else:
                        failed = [step.event_type.value for step in result.steps if not step.success]
                        st.error(f"Some changes failed to save: {', '.join(failed)}")
