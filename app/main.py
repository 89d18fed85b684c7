"""
Streamlit Frontend for FinnAI

The dashboard is a thin layer over the DashboardController:
- it collects input and calls controller operations
- it renders whatever the controller derives

No number shown here is computed here.
"""

import asyncio
import html
from datetime import date

import pandas as pd
import streamlit as st

from finnai.analytics import Timeframe
from finnai.charts import cash_flow_bar, category_pie
from finnai.config import get_settings, validate_all_settings
from finnai.ledger import LedgerError
from finnai.models.insight import InsightImpact
from finnai.models.ledger import (
    AccountType,
    Category,
    NewAccount,
    NewTransaction,
    TransactionType,
)
from finnai.orchestrator import DashboardController, create_app_components


# Page configuration
st.set_page_config(
    page_title="FinnAI",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .insight-card {
        padding: 16px;
        border-radius: 12px;
        margin: 8px 0;
        border-left: 5px solid #6366f1;
        background-color: #f8fafc;
    }
    .insight-positive { border-left-color: #22c55e; }
    .insight-negative { border-left-color: #ef4444; }
    .forecast-box {
        padding: 20px;
        background-color: #0f172a;
        color: #f8fafc;
        border-radius: 16px;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_controller() -> DashboardController:
    """One controller per browser session."""
    if "controller" not in st.session_state:
        st.session_state.controller = create_app_components(use_gemini=True)
    return st.session_state.controller


def money(amount) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    controller = get_controller()

    st.sidebar.title("💰 FinnAI")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📈 Dashboard", "🧾 Activity", "🏦 Accounts", "✨ AI Coach", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.metric("Total Net Worth", money(controller.summary().balance))

    timeframes = list(Timeframe)
    selected = st.sidebar.radio(
        "Timeframe",
        timeframes,
        index=timeframes.index(controller.timeframe),
        format_func=lambda tf: tf.value.title(),
        horizontal=True,
    )
    controller.set_timeframe(selected)

    refresh_insights_if_stale(controller)

    if page == "📈 Dashboard":
        render_dashboard_page(controller)
    elif page == "🧾 Activity":
        render_activity_page(controller)
    elif page == "🏦 Accounts":
        render_accounts_page(controller)
    elif page == "✨ AI Coach":
        render_ai_page(controller)
    elif page == "⚙️ Settings":
        render_settings_page()

    # Forms on the page may have changed the filtered set
    refresh_insights_if_stale(controller)


def refresh_insights_if_stale(controller: DashboardController):
    """Re-run the analysis whenever the filtered transactions changed."""
    if controller.insights_stale:
        with st.sidebar:
            with st.spinner("Analyzing your spending..."):
                run_async(controller.refresh_insights())


def render_dashboard_page(controller: DashboardController):
    st.title("Financial Hub")
    st.markdown("Monitoring your financial landscape.")

    summary = controller.summary()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Net Worth", money(summary.balance))
    col2.metric("Income", money(summary.income))
    col3.metric("Expenses", money(summary.expenses))
    col4.metric("Savings Rate", f"{summary.savings_rate}%")

    breakdown = controller.category_breakdown()

    left, right = st.columns(2)
    with left:
        st.plotly_chart(category_pie(breakdown), use_container_width=True)
    with right:
        st.plotly_chart(cash_flow_bar(summary), use_container_width=True)

    st.subheader("Top spending")
    top = controller.top_categories(get_settings().app.top_category_count)
    if not top:
        st.info("No expenses in this timeframe.")
    for entry in top:
        st.markdown(f"**{entry.category.value}**: {money(entry.amount)}")


def render_activity_page(controller: DashboardController):
    st.title("Ledger History")

    with st.expander("➕ Add transaction"):
        render_transaction_form(controller)

    rows = [
        {
            "Date": t.transaction_date,
            "Description": t.description,
            "Category": t.category.value,
            "Sub-category": t.sub_category,
            "Type": t.type.value,
            "Amount": float(t.signed_amount),
        }
        for t in controller.filtered_transactions()
    ]
    if not rows:
        st.info("No transactions in this timeframe.")
        return
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def render_transaction_form(controller: DashboardController):
    accounts = controller.accounts
    if not accounts:
        st.warning("Open an account first.")
        return

    with st.form("new_transaction", clear_on_submit=True):
        amount = st.text_input("Amount *", placeholder="0.00")
        description = st.text_input("Description")
        col1, col2 = st.columns(2)
        with col1:
            category = st.selectbox(
                "Category",
                list(Category),
                index=list(Category).index(Category.FOOD),
                format_func=lambda c: c.value,
            )
            tx_type = st.selectbox(
                "Type",
                list(TransactionType),
                format_func=lambda t: t.value.title(),
            )
        with col2:
            sub_category = st.text_input("Sub-category")
            account = st.selectbox(
                "Account",
                accounts,
                format_func=lambda a: a.name,
            )
        tx_date = st.date_input("Date", value=date.today())

        if st.form_submit_button("Save transaction", type="primary"):
            try:
                controller.add_transaction(NewTransaction(
                    amount=amount,
                    description=description,
                    category=category,
                    sub_category=sub_category,
                    type=tx_type,
                    account_id=account.id,
                    transaction_date=tx_date,
                ))
                st.success("Transaction saved.")
            except LedgerError as e:
                st.error(str(e))


def render_accounts_page(controller: DashboardController):
    st.title("Your Vaults")

    for account in controller.accounts:
        col1, col2 = st.columns([3, 1])
        col1.markdown(f"**{account.name}**  \n{account.type.value}")
        col2.markdown(f"### {money(account.balance)}")

    st.markdown("---")
    st.subheader("Open an account")
    with st.form("new_account", clear_on_submit=True):
        name = st.text_input("Account name *")
        account_type = st.selectbox(
            "Type",
            list(AccountType),
            format_func=lambda t: t.value,
        )
        balance = st.text_input("Opening balance", placeholder="0.00")

        if st.form_submit_button("Create account", type="primary"):
            try:
                controller.add_account(NewAccount(
                    name=name,
                    type=account_type,
                    balance=balance or None,
                ))
                st.success("Account created.")
            except LedgerError as e:
                st.error(str(e))


def render_ai_page(controller: DashboardController):
    st.title("AI Intelligence")

    report = controller.insights
    if report is None:
        st.info("No insights yet.")
        return

    st.markdown(f"""
    <div class="forecast-box">
        <h4>🔮 Forecast</h4>
        <p>{html.escape(report.forecast)}</p>
    </div>
    """, unsafe_allow_html=True)

    for insight in report.insights:
        css = "insight-card"
        if insight.impact == InsightImpact.POSITIVE:
            css += " insight-positive"
        elif insight.impact == InsightImpact.NEGATIVE:
            css += " insight-negative"
        st.markdown(f"""
        <div class="{css}">
            <small>{insight.type.value.replace('_', ' ').upper()}</small>
            <h4>{html.escape(insight.title)}</h4>
            <p>{html.escape(insight.description)}</p>
        </div>
        """, unsafe_allow_html=True)


def render_settings_page():
    st.title("⚙️ Settings")

    st.markdown("### Connection Status")

    status = validate_all_settings()

    services = [
        ("Gemini (AI)", "gemini"),
        ("Insight client", "insights"),
        ("Application", "app"),
    ]

    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown(
        "To configure the application, create a `.env` file with your API keys. "
        "See `.env.example` for the required variables."
    )


if __name__ == "__main__":
    main()
