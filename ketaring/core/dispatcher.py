import argparse
import functools
from typing import Any, Protocol

from ketaring.core.ports.cluster import ClusterModel


class CommandHandler(Protocol):
    def __call__(
        self,
        model: ClusterModel,
        namespace: argparse.Namespace,
    ) -> dict[str, Any]:
        ...


class CommandDispatcher:
    def __init__(self) -> None:
        self._commands: dict[str, CommandHandler] = {}

    def dispatch(
        self,
        command: str,
        *,
        model: ClusterModel,
        namespace: argparse.Namespace
    ) -> dict[str, Any]:
        handler = self._commands.get(command)
        if handler is None:
            raise RuntimeError(f"Unknown '{command}' Command")
        return handler(model, namespace)

    def command(self, name: str):
        def decorator(func: CommandHandler):

            @functools.wraps(func)
            def wrapper(
                model: ClusterModel,
                namespace: argparse.Namespace,
            ) -> dict[str, Any]:
                return func(model, namespace)

            self._commands[name] = wrapper

            return wrapper

        return decorator
