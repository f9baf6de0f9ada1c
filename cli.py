# cli.py - browse the Rainforest Foods catalog from the terminal
import argparse
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.rainforest_client import CatalogClient, CatalogAPIError

console = Console()

DEFAULT_BASE_URL = os.getenv("CATALOG_API_URL", "http://127.0.0.1:5000/api")

# Global state for status messages and caching
status_message = "Ready"
category_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "🌿 Products"):
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
    table.add_column("ID", style="dim", justify="right", width=5)
    table.add_column("Name", style="bold", width=26)
    table.add_column("Price", justify="right", width=9)
    table.add_column("Category", width=10)
    table.add_column("Stock", width=8)
    table.add_column("★", width=2)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
            "★" if p.get("featured") is True else ""
        )
    console.print(table)


def show_product(product: Dict[str, Any]):
    body = (
        f"[bold]{product.get('name', 'N/A')}[/bold]  [green]${product.get('price', 0):.2f}[/green]\n"
        f"[dim]category:[/dim] {product.get('category', 'N/A')}   "
        f"[dim]in stock:[/dim] {'yes' if product.get('inStock') else 'no'}\n\n"
        f"{product.get('description', '')}"
    )
    console.print(Panel(body, title=f"Product #{product.get('id')}", border_style="cyan"))


def show_categories(categories: List[Dict[str, Any]]):
    if not categories:
        console.print("[italic yellow]No categories found[/italic yellow]")
        return

    table = Table(title="🏷️ Categories", box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("ID", style="dim", justify="right", width=4)
    table.add_column("Name", style="bold", width=12)
    table.add_column("Display name", width=22)
    table.add_column("Description", width=40)
    for cat in categories:
        table.add_row(
            str(cat.get("id", "N/A")),
            cat.get("name", "N/A"),
            cat.get("displayName", ""),
            cat.get("description", "")
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
    Calls fn(*args, **kwargs) behind a spinner and returns its result.
    API and connection errors are reported in the status panel; returns None then.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Loading...", total=None)
            result = fn(*args, **kwargs)
    except CatalogAPIError as e:
        status_message = f"Error: {e.message}"
        console.print(show_status(status_message, False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


def get_category_completer(c: CatalogClient):
    global category_cache
    if not category_cache:
        category_cache = try_api(c.list_categories) or []
    return WordCompleter([cat.get("name", "") for cat in category_cache if cat.get("name")], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🌿 Rainforest Foods",
        "[bold blue]Catalog browser[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Interactive menu
# ---------------------------
def menu(c: CatalogClient):
    global status_message

    console.clear()
    console.print(create_header())

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products", "5", "🔢 Get product by ID"),
            ("2", "✅ In-stock products", "6", "🏷️ List categories"),
            ("3", "⭐ Featured products", "7", "📂 Products in category"),
            ("4", "🔍 Search products", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                show_products(products)

        elif choice == "2":
            products = try_api(c.list_products, available_only=True, success_msg="In-stock products loaded")
            if products is not None:
                show_products(products, title="✅ In stock")

        elif choice == "3":
            products = try_api(c.featured_products, success_msg="Featured products loaded")
            if products is not None:
                show_products(products, title="⭐ Featured")

        elif choice == "4":
            term = prompt_with_autocomplete("Enter search term")
            products = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if products is not None:
                show_products(products, title=f"🔍 '{term}'")

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID")
            product = try_api(c.get_product, pid)
            if product:
                show_product(product)

        elif choice == "6":
            categories = try_api(c.list_categories, success_msg="Categories loaded")
            if categories is not None:
                show_categories(categories)

        elif choice == "7":
            name = prompt_with_autocomplete("Category", completer=get_category_completer(c))
            products = try_api(c.products_by_category, name, success_msg=f"Category '{name}' loaded")
            if products is not None:
                show_products(products, title=f"📂 {name}")

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for browsing! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


# ---------------------------
# Command line
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rainforest Foods catalog CLI")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL including prefix")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List all products")
    lp.add_argument("--available-only", action="store_true", help="Show only products in stock")

    subparsers.add_parser("featured", help="List featured products")

    sp = subparsers.add_parser("search", help="Search products by name or description")
    sp.add_argument("--q", required=True, help="Search term")

    cp = subparsers.add_parser("category", help="List products in a category")
    cp.add_argument("--name", required=True, help="Category name, e.g. powders")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    subparsers.add_parser("list-categories", help="List all categories")

    gc = subparsers.add_parser("get-category", help="Get a category by name")
    gc.add_argument("--name", required=True, help="Category name")

    subparsers.add_parser("health", help="Check that the API is up")
    subparsers.add_parser("interactive", help="Interactive menu with autocomplete")
    return parser


def run(args: argparse.Namespace, c: CatalogClient) -> int:
    """Execute one parsed command. Returns the process exit code."""
    if args.command == "interactive":
        menu(c)
        return 0

    try:
        if args.command == "list-products":
            show_products(c.list_products(available_only=args.available_only))
        elif args.command == "featured":
            show_products(c.featured_products(), title="⭐ Featured")
        elif args.command == "search":
            show_products(c.search_products(args.q), title=f"🔍 '{args.q}'")
        elif args.command == "category":
            show_products(c.products_by_category(args.name), title=f"📂 {args.name}")
        elif args.command == "get-product":
            show_product(c.get_product(args.product_id))
        elif args.command == "list-categories":
            show_categories(c.list_categories())
        elif args.command == "get-category":
            show_categories([c.get_category(args.name)])
        elif args.command == "health":
            console.print(c.health())
    except CatalogAPIError as e:
        console.print(show_status(e.message, False))
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return run(args, CatalogClient(base_url=args.base_url))


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
