from typing import Protocol


class Renderer(Protocol):
    """
    Turns a command result into the text printed by ketactl.
    Implementations must accept nested dicts, lists and scalars.
    """

    def render(self, data: dict) -> str:
        """Return the textual form of `data`."""
