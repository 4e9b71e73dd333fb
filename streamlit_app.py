# streamlit_app.py
"""
Transaction Tracker (Streamlit).

Add income and expense entries, search and filter them, see the running
balance and move the whole ledger in and out as JSON. Data lives in
<data_directory>/transactions.json and is rewritten after every change.

Run with: streamlit run streamlit_app.py
"""

from datetime import date

import plotly.express as px
import streamlit as st

from analysis import ALL_TYPES, aggregate, apply_filters, category_totals, txs_to_df
from config import get_settings
from connectivity import ConnectivityMonitor, ProbeConnectivitySource
from exchange import InvalidDocumentError, export_document, export_filename, import_document
from ledger import Ledger
from logging_utils import configure_root_logger
from models import CATEGORIES, TransactionType
from storage import open_repository

settings = get_settings()
configure_root_logger(settings.log_level)

st.set_page_config(page_title="Transaction Tracker", layout="wide", initial_sidebar_state="expanded")

# the file store is the source of truth; each rerun reloads it
ledger = Ledger.open(open_repository(settings))


@st.cache_resource
def connectivity_source():
    return ProbeConnectivitySource.from_settings(settings)


# one monitor per browser session, subscribed for as long as the session lives
if "connectivity_monitor" not in st.session_state:
    st.session_state.connectivity_monitor = ConnectivityMonitor(connectivity_source()).start()
monitor = st.session_state.connectivity_monitor

# -----------------------
# Header and totals
# -----------------------
title_col, status_col = st.columns([5, 1])
title_col.title("Transaction Tracker")


@st.fragment(run_every=settings.probe_interval or None)
def connectivity_badge():
    # poll is throttled by the source, so reruns do not probe the network each time
    monitor.source.poll()
    st.markdown(":green[● Online]" if monitor.online else ":orange[● Offline]")


with status_col:
    connectivity_badge()

totals = aggregate(ledger.transactions)
col1, col2, col3 = st.columns(3)
col1.metric("Income", f"${totals.income:,.2f}")
col2.metric("Expenses", f"${totals.expense:,.2f}")
col3.metric("Balance", f"${totals.balance:,.2f}")

# -----------------------
# Add transaction
# -----------------------
st.header("Add transaction")
with st.form("add_tx", clear_on_submit=True):
    c1, c2 = st.columns(2)
    with c1:
        description = st.text_input("Description")
        tx_type = st.selectbox("Type", options=[t.value for t in TransactionType], index=1)
    with c2:
        amount = st.text_input("Amount")
        category = st.selectbox("Category", options=list(CATEGORIES))
    tx_date = st.date_input("Date", value=date.today())
    if st.form_submit_button("Add transaction"):
        if ledger.add(description, amount, type=tx_type, category=category, date=tx_date.isoformat()):
            st.rerun()

# -----------------------
# Sidebar: export / import
# -----------------------
st.sidebar.title("Export / Import")
st.sidebar.download_button(
    "Export JSON",
    export_document(ledger.transactions).encode("utf-8"),
    file_name=export_filename(),
    mime="application/json",
    disabled=not len(ledger),
)
uploaded = st.sidebar.file_uploader("Import JSON", type=["json"])
if uploaded is not None and st.sidebar.button("Import file"):
    try:
        imported = import_document(ledger, uploaded.getvalue())
    except InvalidDocumentError:
        st.sidebar.error("Error importing file. Please check the file format.")
    else:
        st.sidebar.success(f"Imported {len(imported)} transactions.")
        st.rerun()

# -----------------------
# Transaction list
# -----------------------
list_header = st.empty()
f1, f2 = st.columns([3, 1])
search = f1.text_input("Search", placeholder="Search description or category")
filter_type = f2.selectbox("Show", options=[ALL_TYPES] + [t.value for t in TransactionType])

visible = apply_filters(ledger.transactions, filter_type, search)
list_header.header(f"Transactions ({len(visible)})")
if not visible:
    st.info("No transactions found.")
for i, tx in enumerate(visible):
    c_desc, c_amount, c_delete = st.columns([6, 2, 1])
    badge = ":green-background[income]" if tx.type == TransactionType.INCOME.value else f":red-background[{tx.type}]"
    c_desc.markdown(f"**{tx.description}** {badge}  \n{tx.category} · {tx.date}")
    sign = "+" if tx.type == TransactionType.INCOME.value else "-"
    c_amount.markdown(f"{sign}\\${tx.amount:,.2f}")
    if c_delete.button("Delete", key=f"delete_{i}_{tx.id}"):
        ledger.remove(tx.id)
        st.rerun()

# -----------------------
# Category breakdown
# -----------------------
if len(ledger):
    st.subheader("By category")
    cat_sum = category_totals(txs_to_df(ledger.transactions))
    fig_cat = px.bar(cat_sum, x="category", y="amount", color="type", barmode="group")
    st.plotly_chart(fig_cat, use_container_width=True)
