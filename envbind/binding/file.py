"""
File-backed binding for JSON and YAML documents.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Hashable, Optional

import yaml

from envbind.core.enums import BindingName
from envbind.core.exceptions import BindingError
from envbind.env import Env
from .app import lookup
from .base import Binding

CONFIG_PATH_OPTION = "config_path"


class FileBinding(Binding):
    """
    Reads variables from a JSON or YAML file.

    The file is named by the `config_path` option of the variable and is
    loaded once per path. A value is looked up by the variable's OS
    environment name as a literal key first, then by walking
    `owner -> [namespace ->] keys` for nested documents.
    """

    name = BindingName.FILE.value

    def context_key(self, env: Env) -> Optional[Hashable]:
        path = env.extra_options().get(CONFIG_PATH_OPTION)
        if path is None:
            return None
        return str(Path(path).resolve())

    def init(self, env: Env) -> Mapping:
        path = env.extra_options().get(CONFIG_PATH_OPTION)
        if path is None:
            raise BindingError(self.name, "config path not specified")
        return load_document(Path(path))

    def get_env(self, env: Env, context: Any) -> Any:
        if not isinstance(context, Mapping):
            return None

        value = context.get(env.gen_os_env())
        if value is not None:
            return value

        path = [env.owner]
        if env.namespace is not None:
            path.append(env.namespace)
        path.extend(env.keys)
        return lookup(context, path)


def load_document(path: Path) -> Mapping:
    """
    Parse a JSON or YAML file into a mapping.

    Raises:
        BindingError: If the file cannot be read or is not a mapping
    """
    suffix = path.suffix.lower()
    try:
        with open(path, 'r') as f:
            if suffix == ".json":
                document = json.load(f)
            elif suffix in (".yaml", ".yml"):
                document = yaml.safe_load(f) or {}
            else:
                raise BindingError(BindingName.FILE.value, f"unsupported file type '{suffix}'")
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise BindingError(BindingName.FILE.value, f"cannot load {path} due to {e}") from e

    if not isinstance(document, Mapping):
        raise BindingError(BindingName.FILE.value, f"{path} does not hold a mapping")
    return document
