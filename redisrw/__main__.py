"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

import sys

from .cli import CommandIndex


def main(argv=None) -> int:
    index = CommandIndex()
    index.register()
    return index.execute(argv)


if __name__ == "__main__":
    sys.exit(main())
