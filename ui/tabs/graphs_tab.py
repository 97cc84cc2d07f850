import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from database.exceptions import StoreError
from services.report_service import (
    monthly_series, summarize, totals_by_category, totals_by_payment_method,
)
from services.transaction_service import TransactionService
from utils.constants import CHART_PALETTE, EXPENSE_COLOR, INCOME_COLOR, NEUTRAL_COLOR
from utils.currency import format_axis_value, format_currency
from utils.date_helpers import friendly_month


class GraphsTab(ctk.CTkFrame):
    def __init__(self, master, tx_service: TransactionService, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        # Category colours stay stable across refreshes.
        self._category_colors: dict[str, str] = {}

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_summary()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_summary(self):
        self._summary_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._summary_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=10)
        self._summary_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _chart_panel(self, parent, title: str, figsize, row: int, column: int, **grid):
        outer = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=row, column=column, sticky="nsew", **grid)
        ctk.CTkLabel(
            outer, text=title, font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        fig = Figure(figsize=figsize, dpi=80, tight_layout=True)
        ax = fig.add_subplot(111)
        canvas = FigureCanvasTkAgg(fig, master=outer)
        canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))
        return fig, ax, canvas

    def _build_charts(self):
        top = ctk.CTkFrame(self, fg_color="transparent")
        top.grid(row=1, column=0, sticky="nsew", padx=16, pady=(0, 8))
        top.grid_columnconfigure((0, 1), weight=1)
        top.grid_rowconfigure(0, weight=1)

        self._pie = self._chart_panel(
            top, "Spending by Category", (3, 3), 0, 0, padx=(0, 8)
        )
        self._bar = self._chart_panel(
            top, "Spending by Payment Method", (4, 3), 0, 1
        )
        self._line = self._chart_panel(
            self, "Monthly Income vs Expenses", (8, 2.6), 2, 0, padx=16, pady=(0, 12)
        )

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)
        return fg

    def _no_data(self, ax, canvas, text: str):
        ax.text(0.5, 0.5, text, ha="center", va="center",
                transform=ax.transAxes, color="gray")
        canvas.draw_idle()

    def _load(self):
        try:
            snapshot = self._tx_svc.get_all()
        except StoreError as e:
            snapshot = []
            self._show_summary(None, str(e))
        else:
            self._show_summary(summarize(snapshot))

        by_category = totals_by_category(snapshot)
        by_method = totals_by_payment_method(snapshot)
        series = monthly_series(snapshot)
        self.after(50, lambda: self._draw_pie_chart(by_category))
        self.after(50, lambda: self._draw_bar_chart(by_method.as_dict()))
        self.after(50, lambda: self._draw_line_chart(series))

    def _show_summary(self, summary: dict | None, error: str = ""):
        for w in self._summary_frame.winfo_children():
            w.destroy()
        if summary is None:
            ctk.CTkLabel(
                self._summary_frame, text=f"Could not load transactions: {error}",
                text_color="#F44336",
            ).grid(row=0, column=0, columnspan=3)
            return
        for i, (label, value, color) in enumerate([
            ("Income", summary["income"], INCOME_COLOR),
            ("Expenses", summary["expense"], EXPENSE_COLOR),
            ("Net", summary["net"], NEUTRAL_COLOR if summary["net"] >= 0 else "#FF9800"),
        ]):
            card = ctk.CTkFrame(
                self._summary_frame, fg_color=("gray90", "gray20"), corner_radius=10
            )
            card.grid(row=0, column=i, padx=6, sticky="ew")
            ctk.CTkLabel(card, text=label, text_color="gray60").pack(pady=(10, 0), padx=16)
            ctk.CTkLabel(
                card, text=format_currency(value),
                font=ctk.CTkFont(size=18, weight="bold"),
                text_color=color,
            ).pack(pady=(4, 10), padx=16)

    def _color_for(self, category: str) -> str:
        if category not in self._category_colors:
            idx = len(self._category_colors) % len(CHART_PALETTE)
            self._category_colors[category] = CHART_PALETTE[idx]
        return self._category_colors[category]

    def _draw_pie_chart(self, totals: dict[str, float]):
        fig, ax, canvas = self._pie
        ax.clear()
        fg = self._style_ax(ax, fig)

        items = sorted(
            ((c, t) for c, t in totals.items() if t > 0),
            key=lambda item: item[1], reverse=True,
        )
        if not items:
            self._no_data(ax, canvas, "No expense data")
            return

        total = sum(t for _, t in items)
        ax.pie(
            [t for _, t in items],
            labels=[f"{c}\n{t / total:.0%}" for c, t in items],
            colors=[self._color_for(c) for c, _ in items],
            startangle=90,
            textprops={"color": fg, "fontsize": 8},
        )
        ax.set_aspect("equal")
        canvas.draw_idle()

    def _draw_bar_chart(self, totals: dict[str, float]):
        fig, ax, canvas = self._bar
        ax.clear()
        self._style_ax(ax, fig)

        if not any(totals.values()):
            self._no_data(ax, canvas, "No expense data")
            return

        labels = list(totals)
        values = [totals[k] for k in labels]
        ax.bar(labels, values, color=[CHART_PALETTE[i] for i in range(len(labels))])
        ax.yaxis.set_major_formatter(lambda v, _: format_axis_value(v))
        canvas.draw_idle()

    def _draw_line_chart(self, series):
        fig, ax, canvas = self._line
        ax.clear()
        self._style_ax(ax, fig)

        if not series:
            self._no_data(ax, canvas, "No data")
            return

        x = list(range(len(series)))
        ax.plot(x, [p.income for p in series], marker="o", color=INCOME_COLOR, label="Income")
        ax.plot(x, [p.expense for p in series], marker="o", color=EXPENSE_COLOR, label="Expenses")
        ax.set_xticks(x)
        ax.set_xticklabels([friendly_month(p.month) for p in series])
        ax.yaxis.set_major_formatter(lambda v, _: format_axis_value(v))
        ax.legend(fontsize=8, loc="upper left")
        canvas.draw_idle()
