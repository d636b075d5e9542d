# SPDX-License-Identifier: MIT

from bugbite.cleanup import register_cleanup
from bugbite.initialize import initialize
from bugbite.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
