# cli.py - interactive catalog browser with autocomplete
import argparse
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(base_url=os.environ.get("CATALOG_URL", "http://127.0.0.1:8085"))

KNOWN_CATEGORIES = ["electronics", "clothing", "books", "home", "sports"]

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
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
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
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=28)
    table.add_column("Price", justify="right", width=8)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Category", width=12)

    for p in products:
        qty = p.get("quantity", 0)
        table.add_row(
            p.get("id", "N/A")[:12],
            p.get("name", "N/A"),
            f"${p.get('price', 0)}",
            str(qty) if qty else "[red]out[/red]",
            p.get("category", "N/A")
        )
    console.print(table)


def show_product(p: Dict[str, Any]):
    console.print(Panel.fit(
        f"[bold]{p.get('name')}[/bold]\n"
        f"{p.get('description')}\n\n"
        f"Price: [green]${p.get('price')}[/green]   Qty: {p.get('quantity')}   "
        f"Category: [cyan]{p.get('category')}[/cyan]\n"
        f"[dim]{p.get('img')}[/dim]",
        title=f"ℹ️ {p.get('id')}"
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are reported in the status panel and None is returned.
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


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([p["id"] for p in product_cache if p.get("id")])


def get_category_completer():
    seen = {p.get("category") for p in product_cache if p.get("category")}
    return WordCompleter(sorted(seen | set(KNOWN_CATEGORIES)), ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog SDK",
        "[bold blue]Product Catalog Browser[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_row("1", "📦 List products", "4", "➕ Create product")
        menu_table.add_row("2", "🏷️ Filter by category", "5", "🔄 Reseed catalog")
        menu_table.add_row("3", "ℹ️ Get product by ID", "q", "👋 Quit")
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "5", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            products = try_api(c.list_products, category, success_msg=f"Filtered by '{category}'")
            if products is not None:
                show_products(products, title=f"🏷️ {category.lower()}")

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            status_message = "Ready"
            resp = try_api(c.get_product, pid.strip())
            if resp is None and "Error" not in status_message:
                console.print(f"[yellow]No product with id '{pid}'[/yellow]")
            elif resp:
                show_product(resp)

        elif choice == "4":
            name = prompt_with_autocomplete("Product name")
            description = prompt_with_autocomplete("Description")
            img = prompt_with_autocomplete("Image URL", default="https://example.com/product.png")
            price = IntPrompt.ask("💰 Price in dollars", default=10)
            qty = IntPrompt.ask("📦 Initial quantity", default=1)
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            resp = try_api(
                c.create_product, img, name, description, price, qty, category,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                show_product(resp)
                product_cache = try_api(c.list_products) or []

        elif choice == "5":
            if Confirm.ask("[red]This replaces the whole catalog with demo data. Continue?[/red]"):
                resp = try_api(c.reseed, success_msg="Catalog reseeded")
                if resp:
                    console.print(resp)
                    product_cache = try_api(c.list_products) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using PyCatalog! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot commands
# ---------------------------
def run_command(argv: List[str]) -> None:
    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--img", required=True)
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=int, required=True, help="Price in whole dollars")
    cp.add_argument("--quantity", type=int, required=True, help="Initial quantity")
    cp.add_argument("--category", required=True)

    subparsers.add_parser("reseed", help="Replace the catalog with demo data")

    args = parser.parse_args(argv)

    if args.command == "list-products":
        show_products(c.list_products(args.category))
    elif args.command == "get-product":
        p = c.get_product(args.product_id)
        if p is None:
            console.print(f"[yellow]No product with id '{args.product_id}'[/yellow]")
            sys.exit(1)
        show_product(p)
    elif args.command == "create-product":
        show_product(c.create_product(args.img, args.name, args.description,
                                      args.price, args.quantity, args.category))
    elif args.command == "reseed":
        console.print(c.reseed())


def main():
    if len(sys.argv) > 1:
        run_command(sys.argv[1:])
        return
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
