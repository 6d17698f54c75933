import json
import os
from typing import IO, Any

import yaml


class Loader(yaml.SafeLoader):
    """YAML Loader，支持 `!include` 引用其他文件，`!env` 读取环境变量。"""

    def __init__(self, stream: IO) -> None:
        try:
            self.root = os.path.split(stream.name)[0]
        except AttributeError:
            self.root = os.path.curdir

        super().__init__(stream)


def construct_include(loader: Loader, node: yaml.Node) -> Any:
    """引用相对于当前文件路径的yaml/json/文本文件"""

    filename = os.path.abspath(os.path.join(loader.root, loader.construct_scalar(node)))
    extension = os.path.splitext(filename)[1].lstrip('.')

    with open(filename, 'r', encoding='utf-8') as f:
        if extension in ('yaml', 'yml'):
            return yaml.load(f, Loader)
        elif extension in ('json', ):
            return json.load(f)
        else:
            return ''.join(f.readlines())


def construct_env(loader: Loader, node: yaml.Node) -> Any:
    """
    `!env REDIS_PASSWORD` 读取环境变量，未设置时为null；
    `!env [REDIS_PASSWORD, default]` 未设置时使用默认值。
    密码等敏感配置不要直接写在配置文件里。
    """
    if isinstance(node, yaml.ScalarNode):
        return os.environ.get(loader.construct_scalar(node))
    elif isinstance(node, yaml.SequenceNode):
        args = loader.construct_sequence(node, deep=True)
        if len(args) != 2:
            raise yaml.constructor.ConstructorError(
                None, None, 'expected [name, default]', node.start_mark)
        return os.environ.get(args[0], args[1])
    raise yaml.constructor.ConstructorError(
        None, None, 'expected a scalar or a sequence', node.start_mark)


yaml.add_constructor('!include', construct_include, Loader)
yaml.add_constructor('!env', construct_env, Loader)
