"""
Streamlit Frontend for Daily Spends

This is the screen people open every day to jot down what they spent.

DESIGN PRINCIPLES:
1. One tap to today or yesterday
2. Totals always recomputed from the records, never typed in
3. Clear error messages in simple language
4. Visual feedback for every save and delete
5. Nothing leaves the device except through an explicit export

Every page talks to the same ExpenseTracker, built once per server
process by create_app_components.
"""

from datetime import date, timedelta

import streamlit as st

from dailyspend.analytics import month_grid_weeks
from dailyspend.charts import (
    create_category_pie_chart,
    create_monthly_bar_chart,
    create_weekly_bar_chart,
)
from dailyspend.config import get_settings, validate_all_settings
from dailyspend.errors import StorageError, TransferError, ValidationError
from dailyspend.services.storage import InMemoryRecordStore, JsonFileRecordStore
from dailyspend.services.transfer import export_filename
from dailyspend.tracker import ExpenseTracker, create_app_components
from dailyspend.utils import (
    CURRENCIES,
    add_months,
    format_amount_display,
    format_date,
    format_display_date,
    month_label,
    parse_date,
    previous_day,
)


# Page configuration
st.set_page_config(
    page_title="Daily Spends",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 4px;
    }
    .total-box {
        padding: 16px;
        background-color: #eef2ff;
        border-radius: 10px;
        border-left: 5px solid #4f46e5;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        color: #2c3e50;
    }
    .category-dot {
        display: inline-block;
        width: 10px;
        height: 10px;
        border-radius: 50%;
        margin-right: 6px;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    try:
        return create_app_components()
    except (StorageError, ValueError) as e:
        st.error(f"Failed to open saved data, using a temporary store: {e}")
        return create_app_components(store=InMemoryRecordStore())


def money(value) -> str:
    return format_amount_display(value, st.session_state.currency)


def init_session_state():
    if "selected_date" not in st.session_state:
        st.session_state.selected_date = date.today()
    if "currency" not in st.session_state:
        st.session_state.currency = get_settings().app.currency
    if "calendar_month" not in st.session_state:
        today = date.today()
        st.session_state.calendar_month = (today.year, today.month)


def main():
    """Main application entry point."""
    tracker, store = get_components()
    init_session_state()

    # Sidebar navigation
    st.sidebar.title("💸 Daily Spends")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["➕ Add Expense", "📅 Calendar", "📊 Charts", "🏷️ Categories", "⚙️ Settings"],
        index=0,
        key="page",
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **How to use:**
        1. Pick the day
        2. Enter what you spent
        3. Check the totals and charts
        """
    )

    # Route to appropriate page
    if page == "➕ Add Expense":
        render_expense_page(tracker)
    elif page == "📅 Calendar":
        render_calendar_page(tracker)
    elif page == "📊 Charts":
        render_charts_page(tracker)
    elif page == "🏷️ Categories":
        render_categories_page(tracker)
    elif page == "⚙️ Settings":
        render_settings_page(tracker, store)


def render_date_picker():
    """Date input with Today / Yesterday shortcuts."""
    col1, col2, col3 = st.columns([3, 1, 1])
    with col2:
        if st.button("Today"):
            st.session_state.selected_date = date.today()
    with col3:
        if st.button("Yesterday"):
            st.session_state.selected_date = date.today() - timedelta(days=1)
    with col1:
        picked = st.date_input("Date", value=st.session_state.selected_date)
        st.session_state.selected_date = picked
    return format_date(st.session_state.selected_date)


def render_expense_page(tracker: ExpenseTracker):
    """Render the daily entry page."""
    st.title("➕ Add Expense")

    selected = render_date_picker()
    st.caption(format_display_date(selected))

    # Totals
    day_total = tracker.daily_total(selected)
    before_total = tracker.daily_total(previous_day(selected))

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"""
        <div class="total-box">
            <div>Spent on this day</div>
            <div class="big-number">{money(day_total)}</div>
        </div>
        """, unsafe_allow_html=True)
    with col2:
        st.markdown(f"""
        <div class="total-box">
            <div>Day before</div>
            <div class="big-number">{money(before_total)}</div>
        </div>
        """, unsafe_allow_html=True)

    category_totals = tracker.category_totals(selected)
    if category_totals:
        st.markdown("#### By category")
        for row in category_totals:
            name = row.category.name if row.category else "Unknown"
            color = row.category.color if row.category else "#9CA3AF"
            st.markdown(
                f'<span class="category-dot" style="background:{color}"></span>'
                f"{name}: **{money(row.total)}**",
                unsafe_allow_html=True,
            )

    st.markdown("---")

    # Entry form
    categories = tracker.list_categories()
    with st.form("expense_form", clear_on_submit=True):
        name = st.text_input("What did you spend on? *", placeholder="e.g., Lunch")
        amount = st.text_input(
            f"Amount ({CURRENCIES[st.session_state.currency]}) *",
            placeholder="0.00",
        )
        category = st.selectbox(
            "Category",
            options=[None] + categories,
            format_func=lambda c: "No category" if c is None else c.name,
        )
        details = st.text_area("Details (optional)")
        submitted = st.form_submit_button("💾 Save Expense", type="primary")

    if submitted:
        try:
            expense = tracker.create_expense(
                name=name,
                amount=amount,
                date=selected,
                details=details,
                category_id=category.id if category else None,
            )
            st.success(f"Saved {expense.name} ({money(expense.amount)})")
            st.rerun()
        except ValidationError as e:
            st.error(e.message)

    # Expense list
    st.markdown("#### Expenses")
    expenses = tracker.list_expenses(date=selected)
    if not expenses:
        st.info("No expenses recorded for this day yet.")
    for expense in expenses:
        col1, col2, col3 = st.columns([4, 2, 1])
        with col1:
            label = expense.name
            if expense.category:
                label += f"  ·  {expense.category.name}"
            st.markdown(f"**{label}**")
            if expense.details:
                st.caption(expense.details)
        with col2:
            st.markdown(money(expense.amount))
        with col3:
            if st.button("🗑️", key=f"delete_expense_{expense.id}"):
                tracker.delete_expense(expense.id)
                st.rerun()


def render_calendar_page(tracker: ExpenseTracker):
    """Render the month calendar with per-day totals."""
    st.title("📅 Calendar")

    year, month = st.session_state.calendar_month

    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        if st.button("◀ Previous"):
            st.session_state.calendar_month = add_months(year, month, -1)
            st.rerun()
    with col2:
        st.markdown(f"### {month_label(year, month)}")
    with col3:
        if st.button("Next ▶"):
            st.session_state.calendar_month = add_months(year, month, 1)
            st.rerun()

    totals = {row.date: row.total for row in tracker.monthly_totals(year, month)}
    cells = tracker.month_grid(year, month - 1)

    header = st.columns(7)
    for column, day_name in zip(header, ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
        column.markdown(f"**{day_name}**")

    for week in month_grid_weeks(cells):
        columns = st.columns(7)
        for column, cell in zip(columns, week):
            with column:
                label = str(cell.date.day)
                if cell.is_today:
                    label = f"● {label}"
                if cell.date_string in totals:
                    label += f"\n{money(totals[cell.date_string])}"
                if st.button(
                    label,
                    key=f"cell_{cell.date_string}",
                    disabled=not cell.is_current_month,
                ):
                    st.session_state.selected_date = cell.date
                    st.info(f"Selected {format_display_date(cell.date_string)}. Open ➕ Add Expense to see it.")

    summary = tracker.monthly_summary(year, month)
    st.markdown("---")
    st.markdown(f"**Month total:** {money(summary.total)}")


def render_charts_page(tracker: ExpenseTracker):
    """Render category, weekly and monthly charts."""
    st.title("📊 Charts")

    selected = render_date_picker()
    currency = st.session_state.currency

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            create_category_pie_chart(tracker.category_totals(selected)),
            use_container_width=True,
        )
    with col2:
        st.plotly_chart(
            create_weekly_bar_chart(tracker.weekly_totals(selected), currency),
            use_container_width=True,
        )

    day = parse_date(selected)
    summary = tracker.monthly_summary(day.year, day.month)

    st.markdown(f"### {month_label(day.year, day.month)}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total", money(summary.total))
    if summary.highest_day:
        highest = parse_date(summary.highest_day.date)
        col2.metric(
            "Highest day",
            money(summary.highest_day.total),
            help=f"{highest:%A}, {highest:%b} {highest.day}",
        )
    else:
        col2.metric("Highest day", money(0))
    col3.metric("Daily average", money(summary.average))

    st.plotly_chart(
        create_monthly_bar_chart(tracker.monthly_totals(day.year, day.month), currency),
        use_container_width=True,
    )


def render_categories_page(tracker: ExpenseTracker):
    """Render category management."""
    st.title("🏷️ Categories")

    with st.form("category_form", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        with col1:
            name = st.text_input("Category name *")
        with col2:
            color = st.color_picker("Color", value="#3B82F6")
        submitted = st.form_submit_button("➕ Add Category", type="primary")

    if submitted:
        try:
            category = tracker.create_category(name, color)
            st.success(f"Added {category.name}")
            st.rerun()
        except ValidationError as e:
            st.error(e.message)

    st.markdown("---")
    categories = tracker.list_categories()
    if not categories:
        st.info("No categories yet.")
    for category in categories:
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(
                f'<span class="category-dot" style="background:{category.color}"></span>'
                f"**{category.name}**",
                unsafe_allow_html=True,
            )
        with col2:
            if st.button("🗑️", key=f"delete_category_{category.id}"):
                tracker.delete_category(category.id)
                st.rerun()
    st.caption("Deleting a category keeps its expenses; they become uncategorized.")


def render_settings_page(tracker: ExpenseTracker, store):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Currency")
    options = list(CURRENCIES)
    st.session_state.currency = st.selectbox(
        "Display currency",
        options=options,
        index=options.index(st.session_state.currency),
        format_func=lambda code: f"{code} ({CURRENCIES[code]})",
    )

    st.markdown("---")
    st.markdown("### Export / Import")
    st.download_button(
        "⬇️ Export CSV",
        data=tracker.export_csv(),
        file_name=export_filename(),
        mime="text/csv",
    )

    uploaded = st.file_uploader("Import CSV", type=["csv"])
    if uploaded and st.button("⬆️ Import (replaces current data)"):
        try:
            n_categories, n_expenses = tracker.import_csv(uploaded.getvalue().decode("utf-8"))
            st.success(f"Imported {n_categories} categories and {n_expenses} expenses")
        except (TransferError, ValidationError, UnicodeDecodeError) as e:
            st.error(f"Import failed: {e}")

    st.markdown("---")
    st.markdown("### Storage Status")

    status = validate_all_settings()
    for name, key in [("Storage settings", "storage"), ("App settings", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Invalid')}")

    if isinstance(store, JsonFileRecordStore):
        st.markdown(f"Data is saved in `{store.data_dir}`.")
    else:
        st.warning("Data is kept in memory and will be lost when the app stops.")

    st.markdown(
        "To change where data is kept, set `DAILYSPEND_STORAGE_BACKEND` and "
        "`DAILYSPEND_STORAGE_DATA_DIR` in a `.env` file. "
        "See `.env.example` for all variables."
    )


if __name__ == "__main__":
    main()
