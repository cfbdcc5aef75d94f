import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from budget_core import config
from budget_core.domain import BudgetView, Transaction
from budget_core.services import BudgetPeriodService
from budget_core.transforms import default_budget, load_seed, transactions_for_account

config.configure_logging()

st.set_page_config(page_title="Budgets", layout="wide")

budgets, transactions = load_seed(str(config.SEED_PATH))

# the only place the wall clock is read
NOW = datetime.now()

service = BudgetPeriodService(
    num_past=config.DEFAULT_PAST_PERIODS,
    num_future=config.DEFAULT_FUTURE_PERIODS,
)


def tx_to_df(tx_list: tuple[Transaction, ...]) -> pd.DataFrame:
    rows = [
        {
            "date": pd.to_datetime(t.date, errors="coerce", utc=True),
            "amount": float(t.amount) if t.amount is not None else 0.0,
            "category": t.category,
            "account": t.account_id,
            "description": t.description,
        }
        for t in tx_list
    ]
    df = pd.DataFrame(rows, columns=["date", "amount", "category", "account", "description"])
    if not df.empty:
        df["date"] = df["date"].dt.tz_localize(None)
    return df


def summary_df(view: BudgetView) -> pd.DataFrame:
    df = pd.DataFrame(view.summary.rows(), columns=["category", "spent", "limit", "remaining"])
    for col in ("spent", "limit", "remaining"):
        df[col] = df[col].astype(float)
    return df


st.sidebar.markdown("### 💰 Budgets")
if not budgets:
    st.info("No budgets defined")
    st.stop()

budget_names = {b.name: b for b in budgets}
default = default_budget(budgets)
budget_choice = st.sidebar.selectbox(
    "Budget",
    list(budget_names.keys()),
    index=list(budget_names.keys()).index(default.name),
)
budget = budget_names[budget_choice]

accounts = sorted({t.account_id for t in transactions})
account_choice = st.sidebar.selectbox("Account", ["All accounts"] + accounts)
scoped = transactions_for_account(
    transactions, None if account_choice == "All accounts" else account_choice
)

view = service.compute_view(budget, scoped, NOW)

for issue in view.issues:
    st.warning(issue)

st.title(f"🎯 {budget.name}")
if budget.is_recurring and budget.recurrence_frequency is not None:
    st.caption(
        f"Recurs {budget.recurrence_frequency.value} since {budget.original_start_date:%b %d, %Y}"
    )

if not view.periods:
    st.info("This budget has no periods to show.")
    st.stop()

labels = [f"{p.label} ({p.start:%b %d} – {p.end:%b %d, %Y})" for p in view.periods]
current_index = view.periods.index(view.selected) if view.selected in view.periods else 0
picked = st.selectbox("Period", labels, index=current_index)
period = view.periods[labels.index(picked)]
if period != view.selected:
    view = service.view_for_period(budget, period, scoped, NOW)

summary = view.summary
k1, k2, k3 = st.columns(3)
with k1:
    st.metric("Spent", f"{summary.total_spent:,.2f}")
with k2:
    st.metric("Limit", f"{summary.total_limit:,.2f}")
with k3:
    st.metric("Remaining", f"{summary.remaining:,.2f}")
st.progress(min(100.0, summary.percent_used) / 100)

for alert in service.limit_alerts(budget, view):
    if alert["error"] == "budget_exceeded":
        st.error(f"{alert['message']}: over by {alert['over_budget']:,.2f}")
    else:
        st.warning(alert["message"])

df_sum = summary_df(view)
if not df_sum.empty:
    fig = go.Figure()
    fig.add_bar(x=df_sum["category"], y=df_sum["spent"], name="Spent")
    fig.add_scatter(x=df_sum["category"], y=df_sum["limit"], name="Limit", mode="markers")
    fig.update_layout(title="Spending vs. limit", template="plotly_dark", height=360)
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("📂 Category breakdown")
    category = st.selectbox("Category", list(df_sum["category"]))
    details = service.category_details(budget, category, view.selected, scoped)
    st.caption(
        f"{len(details.transactions)} expenses, {details.total_spent:,.2f} spent"
        + (f" of {details.limit:,.2f}" if details.limit is not None else "")
    )
    df_detail = tx_to_df(details.transactions)
    if not df_detail.empty:
        st.dataframe(df_detail, use_container_width=True)
        st.download_button(
            "⬇ Download CSV",
            df_detail.to_csv(index=False),
            file_name=f"{category.lower().replace(' ', '_')}_{view.selected.start}.csv",
            mime="text/csv",
        )
    else:
        st.info("No expenses in this category for the period.")

st.subheader("📈 Spend per period")
history = pd.DataFrame(
    [
        {
            "period": p.label,
            "spent": float(service.view_for_period(budget, p, scoped, NOW).summary.total_spent),
        }
        for p in view.periods
    ]
)
fig_hist = px.bar(history, x="period", y="spent", template="plotly_dark")
st.plotly_chart(fig_hist, use_container_width=True)
