# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from bugbite.engine import ledger
from bugbite.model.poison import POISON_CATALOG
from bugbite.terminal.custom_typer import AliasedTyperGroup
from bugbite.terminal.session import get_engine
from bugbite.terminal.validate import validate_poison_size
from bugbite.view.status import shop_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, ls")
def list_poisons() -> None:
    shop_view(get_engine().document)


@app.command("poison, p", no_args_is_help=True)
def poison(
    size: Annotated[
        str,
        typer.Argument(
            callback=validate_poison_size, help="valid input: small, medium, large"
        ),
    ],
) -> None:
    """Spend coins to clear infestation."""
    engine = get_engine()
    console = Console()

    cost = POISON_CATALOG[size]["cost"]
    if engine.document["coins"] < cost:
        console.print(
            f"[red]{size} poison costs {cost} coins, "
            f"you have {engine.document['coins']}[/red]"
        )
        raise typer.Exit(1)

    document = ledger.buy_poison(engine, size)
    console.print(
        f"☠️ {size} poison applied, infestation now {document['infestation']}, "
        f"{document['coins']} coins left"
    )
