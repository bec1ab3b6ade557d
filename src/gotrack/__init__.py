# SPDX-License-Identifier: MIT

from gotrack.cleanup import register_cleanup
from gotrack.initialize import initialize
from gotrack.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
