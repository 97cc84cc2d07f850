APP_NAME = "Savr - Personal Finance Manager"
APP_WIDTH = 960
APP_HEIGHT = 640
DB_FILE = "savr.db"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# Choices offered by the entry form. The store itself accepts any string.
CATEGORIES = ["Food", "Transport", "Housing", "Other"]
PAYMENT_METHODS = ["Cash", "Credit Card", "Debit Card"]
TRANSACTION_TYPES = ["Expense", "Income"]

# Payment-method buckets charted by the bar chart, matched by exact string.
CREDIT_CARD = "Credit Card"
DEBIT_CARD = "Debit Card"
CASH = "Cash"

TYPE_FILTERS = ["all", "income", "expense"]

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"
NEUTRAL_COLOR = "#2196F3"

CHART_PALETTE = [
    "#FF9800", "#2196F3", "#9C27B0", "#009688",
    "#F44336", "#8BC34A", "#00BCD4", "#FF5722",
    "#3F51B5", "#CDDC39", "#795548", "#888888",
]
