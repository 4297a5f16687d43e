from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, TextIO


class PromptIO(Protocol):
    """Where an interactive session writes its lines and reads answers."""

    def print(self, text: str = "") -> None: ...

    def input(self, prompt: str = "") -> str: ...


class ConsolePromptIO:
    """Terminal prompt; end of input (Ctrl-D) surfaces as ``EOFError``."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def print(self, text: str = "") -> None:
        print(text, file=self.stream or sys.stdout, flush=True)

    def input(self, prompt: str = "") -> str:
        return input(prompt)


@dataclass(slots=True)
class BufferPromptIO:
    """Scripted answers; running out of them behaves like end of input."""

    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    prompts: List[str] = field(default_factory=list)

    def print(self, text: str = "") -> None:
        self.outputs.append(text)

    def input(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        try:
            return self.inputs.pop(0)
        except IndexError:
            raise EOFError(f"No scripted answer for {prompt!r}") from None

    def transcript(self) -> str:
        return "\n".join(self.outputs)
