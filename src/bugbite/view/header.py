# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

from rich import print
from rich.padding import Padding

from bugbite.color import COIN_COLOR, OVERRUN_COLOR, SWARM_COLOR
from bugbite.model.document import Document

_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def header(document: Document, sub_header: Optional[str] = None) -> None:
    """Print the application header with the coin and infestation counters.

    Args:
        document: The current document
        sub_header: Optional sub-header text to display
    """
    if not _show_header.get():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"

    counters = (
        f"[{COIN_COLOR}]coins {document['coins']}[/{COIN_COLOR}]"
        f"  infestation {document['infestation']}"
    )
    if document["warning"] == "overrun":
        counters += f"  [{OVERRUN_COLOR}]OVERRUN[/{OVERRUN_COLOR}]"
    elif document["warning"] == "swarm":
        counters += f"  [{SWARM_COLOR}]swarm[/{SWARM_COLOR}]"

    print(Padding("[dark_orange]bugbite[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(counters, (0, 1)))
