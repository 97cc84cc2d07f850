import customtkinter as ctk
from database.exceptions import StoreError
from models.transaction import Transaction
from services.transaction_service import TransactionService
from ui.components.date_picker import DatePickerWidget
from utils.constants import CATEGORIES, PAYMENT_METHODS, TRANSACTION_TYPES
from utils.date_helpers import today


class TransactionFields(ctk.CTkFrame):
    """Amount / date / category / payment / type / recurring inputs.

    Shared by the Add Transaction tab and the edit dialog. .values() returns
    the parsed field values or raises ValueError with a user-facing message.
    """

    def __init__(
        self,
        master,
        transaction: Transaction | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._date_format = date_format
        self.grid_columnconfigure(1, weight=1)
        tx = transaction
        r = 0

        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(value=f"{tx.amount:.2f}" if tx else "")
        self._amount_entry = ctk.CTkEntry(
            self, textvariable=self._amount_var, width=200, placeholder_text="0.00"
        )
        self._amount_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=tx.date if tx else today(), date_format=date_format,
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Records created elsewhere may carry values outside the fixed lists.
        self._label("Category:", r)
        categories = list(CATEGORIES)
        if tx and tx.category not in categories:
            categories.append(tx.category)
        self._cat_var = ctk.StringVar(value=tx.category if tx else categories[0])
        ctk.CTkComboBox(
            self, values=categories, variable=self._cat_var, width=200, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Payment Method:", r)
        methods = list(PAYMENT_METHODS)
        if tx and tx.payment_method not in methods:
            methods.append(tx.payment_method)
        self._method_var = ctk.StringVar(value=tx.payment_method if tx else methods[0])
        ctk.CTkComboBox(
            self, values=methods, variable=self._method_var, width=200, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=tx.type_label if tx else TRANSACTION_TYPES[0])
        ctk.CTkSegmentedButton(
            self, values=TRANSACTION_TYPES, variable=self._type_var,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._label("Recurring:", r)
        self._recurring_var = ctk.BooleanVar(value=tx.recurring if tx else False)
        ctk.CTkCheckBox(self, text="", variable=self._recurring_var).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="w"
        )

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def values(self) -> dict:
        raw = self._amount_var.get().strip().replace(",", "").lstrip("$")
        try:
            amount = float(raw)
        except ValueError:
            raise ValueError("Invalid amount.") from None
        if amount < 0:
            raise ValueError("Amount cannot be negative; choose Income or Expense instead.")
        if not self._date_picker.is_valid():
            raise ValueError("Invalid date.")
        return {
            "amount": amount,
            "date": self._date_picker.get_date(),
            "category": self._cat_var.get(),
            "payment_method": self._method_var.get(),
            "is_income": self._type_var.get() == "Income",
            "recurring": self._recurring_var.get(),
        }

    def reset(self):
        """Clear the amount for the next entry; keep the other choices."""
        self._amount_var.set("")
        self._recurring_var.set(False)
        self._amount_entry.focus_set()


class TransactionForm(ctk.CTkToplevel):
    """Modal dialog that edits one existing transaction (full-record update)."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        transaction: Transaction,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._transaction = transaction
        self.saved = False
        self.missing = False

        self.title(f"Edit Transaction #{transaction.id}")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        self._fields = TransactionFields(self, transaction=transaction, date_format=date_format)
        self._fields.grid(row=0, column=0, pady=(12, 0), sticky="ew")

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w"
        ).grid(row=1, column=0, padx=16, pady=(0, 4), sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=2, column=0, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save", width=110, command=self._on_save,
        ).pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _on_save(self):
        try:
            values = self._fields.values()
            updated = self._tx_svc.update(self._transaction.id, **values)
        except (ValueError, StoreError) as e:
            self._error_var.set(str(e))
            return
        if updated:
            self.saved = True
        else:
            self.missing = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
