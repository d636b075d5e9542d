# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bugbite.color import COIN_COLOR, OVERRUN_COLOR
from bugbite.engine.infestation import reward_multiplier, swarm_size
from bugbite.model.document import MAX_INFESTATION, Document
from bugbite.model.poison import POISON_CATALOG
from bugbite.view.header import header


def status_view(document: Document) -> None:
    header(document, "status")

    console = Console()
    if document["overrun"]:
        console.print(
            Panel(f"[{OVERRUN_COLOR}]OVERRUN ACTIVE[/{OVERRUN_COLOR}]", expand=False)
        )

    status_table = Table(box=box.SIMPLE)
    status_table.add_column("property")
    status_table.add_column("value")
    status_table.add_row("coins", f"[{COIN_COLOR}]{document['coins']}[/{COIN_COLOR}]")
    status_table.add_row(
        "infestation", f"{document['infestation']}/{MAX_INFESTATION}"
    )
    status_table.add_row("bugs", "🐛" * swarm_size(document["infestation"]))
    status_table.add_row(
        "reward rate", f"{int(reward_multiplier(document['infestation']) * 100)}%"
    )
    status_table.add_row("warning", document["warning"] or "none")
    status_table.add_row("sound", "on" if document["settings"]["sound_on"] else "off")
    status_table.add_row(
        "open tasks",
        str(len([task for task in document["tasks"] if task["status"] != "smashed"])),
    )
    status_table.add_row(
        "active habit bugs",
        str(
            len(
                [
                    habit
                    for habit in document["habits"]
                    if habit["active_bug_state"] is not None
                ]
            )
        ),
    )
    console.print(status_table)


def shop_view(document: Document) -> None:
    header(document, "shop")

    shop_table = Table(box=box.SIMPLE)
    shop_table.add_column("poison")
    shop_table.add_column("cost")
    shop_table.add_column("clears")
    for size, poison in POISON_CATALOG.items():
        affordable = document["coins"] >= poison["cost"]
        cost = str(poison["cost"]) if affordable else f"[red]{poison['cost']}[/red]"
        shop_table.add_row(size, cost, str(poison["clears"]))

    console = Console()
    console.print(shop_table)
