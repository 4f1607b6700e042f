# cli.py - interactive inventory console with autocomplete
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pyinventory import InventoryClient, InventoryAPIError

console = Console()
c = InventoryClient(base_url=os.environ.get("INVENTORY_API_URL", "http://127.0.0.1:8085"))

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Inventory"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=24)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Threshold", justify="right", width=10)

    for p in products:
        stock = p.get("stockQuantity", 0)
        threshold = p.get("lowStockThreshold", 0)
        stock_cell = f"[bold red]{stock}[/bold red]" if stock < threshold else str(stock)
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description") or "",
            stock_cell,
            str(threshold),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after reporting the failure.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except InventoryAPIError as e:
        status_message = f"Error: {e.message}"
        console.print(show_status(status_message, False))
        return None
    except OSError as e:
        # requests' connection errors derive from OSError
        status_message = f"Error: cannot reach {c.base_url} ({e})"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    product_cache = try_api(c.list_products) or []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    names = [p.get("name", "") for p in product_cache]
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([w for w in (names + ids) if w], ignore_case=True, sentence=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🏭 Inventory",
        "[bold blue]Warehouse Stock Console[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def resolve_product_id(entry: str) -> str:
    """Map a product name picked from the completer back to its id."""
    for p in product_cache:
        if p.get("name", "").lower() == entry.lower():
            return p["id"]
    return entry


def ask_product_id() -> str:
    entry = prompt_with_autocomplete("Enter product name or ID", completer=get_product_completer()).strip()
    return resolve_product_id(entry)


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🗑️ Delete product"),
            ("2", "➕ Create product", "6", "⬆️ Increase stock"),
            ("3", "ℹ️ Get product by ID", "7", "⬇️ Decrease stock"),
            ("4", "✏️ Update product", "8", "⚠️ Low stock report"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                show_products(products)

        elif choice == "2":
            name = prompt_with_autocomplete("Product name")
            description = Prompt.ask("Description", default="")
            qty = IntPrompt.ask("📦 Initial stock", default=0)
            threshold = IntPrompt.ask("⚠️ Low stock threshold", default=10)
            resp = try_api(c.create_product, name, qty, threshold, description,
                           success_msg=f"Product '{name}' created")
            if resp:
                show_products([resp])
                refresh_product_cache()

        elif choice == "3":
            pid = ask_product_id()
            resp = try_api(c.get_product, pid)
            if resp:
                show_products([resp])

        elif choice == "4":
            pid = ask_product_id()
            current = try_api(c.get_product, pid)
            if current:
                fields = {
                    "name": Prompt.ask("Name", default=current["name"]),
                    "description": Prompt.ask("Description", default=current.get("description") or ""),
                    "stockQuantity": IntPrompt.ask("Stock", default=current["stockQuantity"]),
                    "lowStockThreshold": IntPrompt.ask("Threshold", default=current["lowStockThreshold"]),
                }
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if resp:
                    show_products([resp])
                    refresh_product_cache()

        elif choice == "5":
            pid = ask_product_id()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    refresh_product_cache()

        elif choice in ("6", "7"):
            pid = ask_product_id()
            amount = IntPrompt.ask("Amount", default=1)
            if choice == "6":
                resp = try_api(c.increase_stock, pid, amount, success_msg=f"Added {amount} to {pid}")
            else:
                resp = try_api(c.decrease_stock, pid, amount, success_msg=f"Removed {amount} from {pid}")
            if resp:
                show_products([resp])

        elif choice == "8":
            products = try_api(c.low_stock, success_msg="Low stock report loaded")
            if products is not None:
                show_products(products, title="⚠️ Below threshold")

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
