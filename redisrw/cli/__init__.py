import argparse

from .base import CommandInterface
from .call import CallCommand
from .check import CheckCommand

# 把所有命令加入list
COMMANDS: list[type[CommandInterface]] = [
    CheckCommand,
    CallCommand,
]


class CommandIndex:
    def __init__(self):
        self.parser = argparse.ArgumentParser(prog='redisrw', description='读写分离redis工具')

    def register(self):
        command_parsers = self.parser.add_subparsers(dest='command', help='执行操作', required=True)

        for cmd in COMMANDS:
            cmd.register(command_parsers)

    def execute(self, argv=None) -> int:
        args = self.parser.parse_args(argv)

        for cmd in COMMANDS:
            if cmd.name() == args.command:
                return cmd.execute(args)
        return 2
