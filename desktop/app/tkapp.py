"""Tkinter desktop application for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import tkinter as tk
from datetime import date
from tkinter import messagebox, ttk
from typing import Iterable, Optional

from expense_ledger.exceptions import ValidationError
from expense_ledger.log import LOG_LEVELS, configure_logging, default_log_level
from expense_ledger.models import Month, format_date, parse_date
from expense_ledger.services import ExpenseLedger

logger = logging.getLogger(__name__)

PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"

MONTH_LABELS = [month.label for month in Month]


def _today_text() -> str:
    return date.today().isoformat()


def format_amount_display(value: float) -> str:
    return f"{value:.2f}"


def format_total_display(value: float) -> str:
    return f"Total: {format_amount_display(value)}"


def parse_date_input(value: str) -> Optional[date]:
    """Read the date entry; blank is passed on as a missing date."""
    try:
        return parse_date(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class ExpenseTrackerApp(tk.Tk):
    """Main application window."""

    def __init__(self, ledger: ExpenseLedger) -> None:
        super().__init__()
        self.title("Expense Tracker")
        self.geometry("640x420")
        self.minsize(600, 400)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()

        self.ledger = ledger

        self.name_var = tk.StringVar()
        self.amount_var = tk.StringVar()
        self.date_var = tk.StringVar(value=_today_text())
        self.month_var = tk.StringVar()
        self.total_var = tk.StringVar(value=format_total_display(0.0))

        self._build_layout()
        self.refresh()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            logger.debug("clam theme unavailable, keeping %s", style.theme_use())

        style.configure("TFrame", background=PRIMARY_BG)
        style.configure("TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Panel.TFrame", background=SECONDARY_BG, relief="flat")
        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("Total.TLabel", background=SECONDARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 16, "bold"))

        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "App.TCombobox",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            arrowcolor=TEXT_PRIMARY,
        )
        style.map("App.TCombobox", fieldbackground=[("readonly", SECONDARY_BG)])

        style.configure(
            "Primary.TButton",
            background=ACCENT_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
            padding=(18, 6),
        )
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])
        style.configure(
            "Secondary.TButton",
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            padding=(14, 6),
        )
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])

        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            rowheight=26,
        )
        style.configure("App.Treeview.Heading", background=SECONDARY_BG, foreground=TEXT_MUTED, relief="flat")
        style.map("App.Treeview", background=[("selected", ACCENT_BG)])

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        self._build_form()
        self._build_table()
        self._build_footer()

    def _build_form(self) -> None:
        form = ttk.Frame(self, padding=10, style="Panel.TFrame")
        form.grid(row=0, column=0, sticky="ew")
        form.columnconfigure((0, 1, 2), weight=1)

        def add_field(label: str, var: tk.StringVar, column: int) -> ttk.Entry:
            ttk.Label(form, text=label, style="FormLabel.TLabel").grid(
                column=column, row=0, sticky="w", padx=4
            )
            entry = ttk.Entry(form, textvariable=var, style="App.TEntry")
            entry.grid(column=column, row=1, sticky="ew", padx=4)
            return entry

        self.name_entry = add_field("Name (e.g. Groceries)", self.name_var, 0)
        amount_entry = add_field("Amount", self.amount_var, 1)
        add_field("Date (YYYY-MM-DD)", self.date_var, 2)

        amount_entry.bind("<Return>", lambda _event: self.submit())
        ttk.Button(form, text="Add", command=self.submit, style="Primary.TButton").grid(
            column=3, row=1, padx=4
        )

    def _build_table(self) -> None:
        table_frame = ttk.Frame(self, style="Panel.TFrame")
        table_frame.grid(row=1, column=0, sticky="nsew")
        table_frame.columnconfigure(0, weight=1)
        table_frame.rowconfigure(0, weight=1)

        columns = ("name", "amount", "date")
        self.tree = ttk.Treeview(
            table_frame,
            columns=columns,
            show="headings",
            height=10,
            style="App.Treeview",
        )
        headings = {"name": "Name", "amount": "Amount", "date": "Date"}
        for key, label in headings.items():
            width = 220 if key == "name" else 120
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=width, anchor="e" if key == "amount" else "w")

        vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)

        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

    def _build_footer(self) -> None:
        footer = ttk.Frame(self, padding=10, style="Panel.TFrame")
        footer.grid(row=2, column=0, sticky="ew")
        footer.columnconfigure(3, weight=1)

        ttk.Label(footer, text="Filter by month:", style="FormLabel.TLabel").grid(
            column=0, row=0, sticky="w", padx=4
        )
        month_combo = ttk.Combobox(
            footer,
            textvariable=self.month_var,
            values=MONTH_LABELS,
            state="readonly",
            style="App.TCombobox",
            width=12,
        )
        month_combo.grid(column=1, row=0, padx=4)
        month_combo.bind("<<ComboboxSelected>>", lambda _event: self.apply_filter())

        ttk.Button(footer, text="Show all", command=self.reset_filter, style="Secondary.TButton").grid(
            column=2, row=0, padx=4
        )
        ttk.Label(footer, textvariable=self.total_var, style="Total.TLabel").grid(
            column=4, row=0, sticky="e", padx=4
        )

    def submit(self) -> None:
        try:
            expense = self.ledger.add_expense(
                self.name_var.get(),
                self.amount_var.get(),
                parse_date_input(self.date_var.get()),
            )
        except ValidationError as exc:
            logger.warning("Invalid expense: %s", exc)
            messagebox.showerror("Invalid Expense", str(exc).capitalize(), parent=self)
            return

        logger.info("Added %s", expense)
        self.reset_form()
        self.refresh()

    def apply_filter(self) -> None:
        selected = self.month_var.get().strip()
        if not selected:
            self.ledger.clear_month_filter()
        else:
            self.ledger.set_month_filter(selected)
        self.refresh()

    def reset_filter(self) -> None:
        self.month_var.set("")
        self.ledger.clear_month_filter()
        self.refresh()

    def reset_form(self) -> None:
        self.name_var.set("")
        self.amount_var.set("")
        self.date_var.set(_today_text())
        self.name_entry.focus_set()

    def refresh(self) -> None:
        self.tree.delete(*self.tree.get_children())
        for expense in self.ledger.filtered_entries():
            values = (
                expense.name,
                format_amount_display(expense.amount),
                format_date(expense.date),
            )
            self.tree.insert("", "end", values=values)
        self.total_var.set(format_total_display(self.ledger.total()))


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the expense tracker")
    parser.add_argument(
        "--log-level",
        default=default_log_level(),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity (default: $EXPENSE_TRACKER_LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level)

    app = ExpenseTrackerApp(ExpenseLedger())
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
