"""
Staking CLI 진입점

실행 방법:
    python -m cli products --asset BNB
"""

import asyncio
import sys

from cli.commands import main


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
