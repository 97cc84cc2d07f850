import customtkinter as ctk


class _ModalDialog(ctk.CTkToplevel):
    """Message plus a row of buttons; blocks until closed."""

    def __init__(self, master, title: str, message: str, **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        self._btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")
        self._build_buttons(self._btn_frame)

        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _build_buttons(self, frame):
        raise NotImplementedError

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_width(), self.winfo_height()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

    def _close(self, result: bool):
        self.result = result
        self.destroy()


class ConfirmDialog(_ModalDialog):
    """Yes/no confirmation. The answer is in .result after construction."""

    def __init__(self, master, title: str, message: str, confirm_text: str = "Delete", **kwargs):
        self._confirm_text = confirm_text
        super().__init__(master, title, message, **kwargs)

    def _build_buttons(self, frame):
        ctk.CTkButton(
            frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close(False),
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            frame, text=self._confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._close(True),
        ).pack(side="left")


class MessageDialog(_ModalDialog):
    """Single-button notice used for store errors and stale-row warnings."""

    def _build_buttons(self, frame):
        ctk.CTkButton(
            frame, text="OK", width=90, command=lambda: self._close(True),
        ).pack(side="left")
