import customtkinter as ctk
from database.exceptions import StoreError
from services.transaction_service import TransactionService
from ui.components.dialogs import MessageDialog
from ui.components.transaction_form import TransactionFields
from utils.currency import format_transaction_amount


class AddTransactionTab(ctk.CTkFrame):
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

        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text="Add Transaction",
            font=ctk.CTkFont(size=16, weight="bold"),
        ).grid(row=0, column=0, pady=(16, 8))

        self._fields = TransactionFields(self, date_format=date_format)
        self._fields.grid(row=1, column=0, padx=20, pady=8)

        self._status_var = ctk.StringVar()
        self._status_label = ctk.CTkLabel(
            self, textvariable=self._status_var, wraplength=360
        )
        self._status_label.grid(row=2, column=0, pady=(4, 4))

        ctk.CTkButton(
            self, text="Add Transaction", width=160, command=self._on_add,
        ).grid(row=3, column=0, pady=(4, 16))

    def _on_add(self):
        try:
            values = self._fields.values()
        except ValueError as e:
            self._show_status(str(e), "#F44336")
            return
        try:
            tx_id = self._tx_svc.add(**values)
        except ValueError as e:
            self._show_status(str(e), "#F44336")
            return
        except StoreError as e:
            MessageDialog(self.winfo_toplevel(), "Could Not Save", str(e))
            return

        self._show_status(
            f"Added #{tx_id}: "
            f"{format_transaction_amount(values['amount'], values['is_income'])} "
            f"({values['category']})",
            "#4CAF50",
        )
        self._fields.reset()
        self._notify_refresh("transaction")

    def _show_status(self, text: str, color: str):
        self._status_label.configure(text_color=color)
        self._status_var.set(text)
