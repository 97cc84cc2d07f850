import customtkinter as ctk
from services.transaction_service import TransactionService
from ui.tabs.add_transaction_tab import AddTransactionTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.graphs_tab import GraphsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT


_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"transactions", "graphs"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._date_format = date_format

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._build_tabs()

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=0, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Add Transaction", "View Transactions", "Graphs"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._add_tab = AddTransactionTab(
            self._tabview.tab("Add Transaction"),
            tx_service=self._tx_svc,
            notify_refresh=self.notify_tabs_refresh,
            date_format=self._date_format,
        )
        self._add_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("View Transactions"),
            tx_service=self._tx_svc,
            notify_refresh=self.notify_tabs_refresh,
            date_format=self._date_format,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

        self._graphs_tab = GraphsTab(
            self._tabview.tab("Graphs"),
            tx_service=self._tx_svc,
        )
        self._graphs_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "transaction"):
        """Re-read the store for every tab affected by a change of this scope."""
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["transaction"])
        if "transactions" in tabs: self._transactions_tab.refresh()
        if "graphs"       in tabs: self._graphs_tab.refresh()
