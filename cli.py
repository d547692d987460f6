# cli.py
import sys
from datetime import datetime
from typing import Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from cart_service import config
from sdk.cart_client import CartClient

console = Console()
c = CartClient(base_url=config.BASE_URL)


# Global state for status messages and autocomplete
status_message = "Ready"
product_cache = set()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Shopping Cart", style="bold")
    title.append(f" - {cart.get('total_items', 0)} units", style="bold green")

    items = cart.get("items", [])
    if not items:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    for it in sorted(items, key=lambda i: i.get("product_id", "")):
        table.add_row(it.get("product_id", "Unknown"), str(it.get("quantity", 0)))

    console.print(Panel(table, title=title, border_style="blue"))


def show_checkout(resp: Dict[str, Any]):
    if resp.get("success"):
        console.print(Panel.fit(
            f"[green]{resp.get('message', 'Order placed')}[/green]\n"
            f"Order ID: [bold]{resp.get('order_id', 'N/A')}[/bold]\n"
            f"Total: [bold]${resp.get('total', 0):.2f}[/bold]",
            title="✅ Order Confirmation"
        ))
    else:
        console.print(Panel.fit(f"[red]Checkout failed:[/red] {resp.get('message', resp)}", title="❌ Checkout Failed"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None after printing the error.
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

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def refresh_cart(show: bool = True):
    cart = try_api(c.get_cart)
    if cart:
        product_cache.update(it["product_id"] for it in cart.get("items", []))
        if show:
            show_cart(cart)
    return cart


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer():
    return WordCompleter(sorted(product_cache), ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_product_id() -> str:
    return prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛒 Cart Store",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cart(show=False)

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "🛒 View cart", "5", "🧹 Clear cart"),
            ("2", "➕ Add item", "6", "✅ Checkout"),
            ("3", "✏️ Update quantity", "7", "💓 Health check"),
            ("4", "➖ Remove item", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            refresh_cart()

        elif choice == "2":
            pid = ask_product_id()
            qty = IntPrompt.ask("Enter quantity", default=1)
            resp = try_api(c.add_item, pid, qty, success_msg=f"Added {qty} of {pid} to cart")
            if resp is not None:
                refresh_cart()

        elif choice == "3":
            pid = ask_product_id()
            qty = IntPrompt.ask("New quantity (0 removes)", default=1)
            resp = try_api(c.update_quantity, pid, qty, success_msg=f"Quantity of {pid} set to {qty}")
            if resp is not None:
                refresh_cart()

        elif choice == "4":
            pid = ask_product_id()
            removed = try_api(c.remove_item, pid)
            if removed:
                status_message = f"Product {pid} removed from cart"
                product_cache.discard(pid)
            elif removed is False:
                status_message = f"Error: {pid} is not in the cart"
            refresh_cart()

        elif choice == "5":
            if Confirm.ask("[red]This will empty the cart. Continue?[/red]"):
                resp = try_api(c.clear_cart)
                if resp:
                    status_message = resp.get("message", "Cart cleared")
                    product_cache.clear()

        elif choice == "6":
            resp = try_api(c.checkout)
            if resp:
                show_checkout(resp)
                if resp.get("success"):
                    product_cache.clear()

        elif choice == "7":
            resp = try_api(c.health)
            if resp:
                status_message = resp.get("message", "OK")

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
