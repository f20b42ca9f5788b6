"""Terminal UI: rendering, key handling and the Textual application.

Modules:
    render: Rich text for the roster and stat block.
    controller: Key press to roster operation routing.
    app: The Textual application and console entry point.
"""

from wtii.ui.controller import EncounterController, PromptKind, PromptRequest

__all__ = [
    "EncounterController",
    "PromptKind",
    "PromptRequest",
]
