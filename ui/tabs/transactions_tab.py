import customtkinter as ctk
from database.exceptions import StoreError
from models.transaction import Transaction
from services.transaction_service import TransactionService
from ui.components.date_picker import DatePickerWidget
from ui.components.dialogs import ConfirmDialog, MessageDialog
from ui.components.transaction_form import TransactionForm
from utils.constants import EXPENSE_COLOR, INCOME_COLOR, TYPE_FILTERS
from utils.currency import format_transaction_amount
from utils.date_helpers import format_display_date


_MAX_RENDERED_ROWS = 100

_COLUMNS = [("ID", 40), ("Date", 85), ("Type", 70), ("Category", 110),
            ("Payment", 100), ("Amount", 100), ("Recurring", 70), ("Actions", 100)]


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        notify_refresh,   # callable(scope)
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format

        self._type_var = ctk.StringVar(value="all")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._build_table()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="Filter by:").grid(row=0, column=0, padx=(12, 4), pady=6)
        ctk.CTkSegmentedButton(
            bar,
            values=TYPE_FILTERS,
            variable=self._type_var,
            command=lambda _: self._load(),
            width=200,
        ).grid(row=0, column=1, padx=8)

        ctk.CTkLabel(bar, text="From:").grid(row=0, column=2, padx=(12, 4))
        self._start_picker = DatePickerWidget(bar, date_format=self._date_format, allow_empty=True)
        self._start_picker.grid(row=0, column=3)
        ctk.CTkLabel(bar, text="To:").grid(row=0, column=4, padx=(8, 4))
        self._end_picker = DatePickerWidget(bar, date_format=self._date_format, allow_empty=True)
        self._end_picker.grid(row=0, column=5)

        ctk.CTkButton(bar, text="Apply Filter", width=90, command=self._load).grid(
            row=0, column=6, padx=(8, 4)
        )
        ctk.CTkButton(
            bar, text="Clear", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._clear_filters,
        ).grid(row=0, column=7, padx=(0, 8))

        self._status_var = ctk.StringVar()
        ctk.CTkLabel(bar, textvariable=self._status_var, text_color="gray60").grid(
            row=1, column=0, columnspan=8, padx=12, pady=(0, 6), sticky="w"
        )

    def _clear_filters(self):
        self._type_var.set("all")
        self._start_picker.set_date(None)
        self._end_picker.set_date(None)
        self._load()

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        for i, (label, width) in enumerate(_COLUMNS):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    # ── Scrollable table ─────────────────────────────────────────────────────
    def _build_table(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _fetch(self) -> list[Transaction]:
        type_f = self._type_var.get()
        if self._start_picker.is_empty() and self._end_picker.is_empty():
            return self._tx_svc.get_all(type_f)
        if not (self._start_picker.is_valid() and self._end_picker.is_valid()):
            raise ValueError("Enter valid From and To dates, or clear the filter.")
        if self._start_picker.is_empty() or self._end_picker.is_empty():
            raise ValueError("A date range needs both a From and a To date.")
        return self._tx_svc.get_in_range(
            self._start_picker.get_date(), self._end_picker.get_date(), type_f
        )

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        try:
            rows = self._fetch()
        except ValueError as e:
            self._status_var.set(str(e))
            return
        except StoreError as e:
            self._status_var.set(f"Could not load transactions: {e}")
            return

        if not rows:
            self._status_var.set("")
            ctk.CTkLabel(
                self._scroll, text="No transactions to show.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        total = len(rows)
        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx)

        if total > _MAX_RENDERED_ROWS:
            self._status_var.set(
                f"Showing {_MAX_RENDERED_ROWS} of {total} transactions. "
                f"Narrow the date range to see the rest."
            )
        else:
            self._status_var.set(f"{total} transaction{'s' if total != 1 else ''}")

    def _add_row(self, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        color = INCOME_COLOR if tx.is_income else EXPENSE_COLOR
        cells = [
            (str(tx.id), "w", None),
            (format_display_date(tx.date, self._date_format), "w", None),
            (tx.type_label, "w", color),
            (tx.category or "—", "w", None),
            (tx.payment_method or "—", "w", None),
            (format_transaction_amount(tx.amount, tx.is_income), "e", color),
            ("Yes" if tx.recurring else "", "w", None),
        ]
        for col, (text, anchor, text_color) in enumerate(cells):
            label = ctk.CTkLabel(row, text=text, width=_COLUMNS[col][1], anchor=anchor)
            if text_color:
                label.configure(text_color=text_color)
            label.grid(row=0, column=col, padx=4, pady=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=len(cells), padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._open_edit_form(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._delete_tx(t),
        ).pack(side="left")

    def _open_edit_form(self, tx: Transaction):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, tx, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.missing:
            self._show_missing(tx)
        if form.saved or form.missing:
            self._notify_refresh("transaction")

    def _delete_tx(self, tx: Transaction):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Transaction",
            f"Delete this {tx.type_label.lower()} of "
            f"{format_transaction_amount(tx.amount, tx.is_income)} on "
            f"{format_display_date(tx.date, self._date_format)}?",
        )
        if not dlg.result:
            return
        try:
            deleted = self._tx_svc.delete(tx.id)
        except StoreError as e:
            MessageDialog(self.winfo_toplevel(), "Delete Failed", str(e))
            return
        if not deleted:
            self._show_missing(tx)
        self._notify_refresh("transaction")

    def _show_missing(self, tx: Transaction):
        MessageDialog(
            self.winfo_toplevel(),
            "Transaction Not Found",
            f"Transaction #{tx.id} no longer exists. The list will be refreshed.",
        )
