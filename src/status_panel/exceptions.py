"""
Exception classes for the status panel.

- StatusPanelError: base class caught by the CLI
- TerminalError: terminal initialize/draw/restore failed
- ProducerError: a producer thread reported a Fatal event

Per project patterns:
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""


class StatusPanelError(Exception):
    """Base class for errors that end a status panel run."""


class TerminalError(StatusPanelError):
    """
    Raised when the terminal renderer fails.

    Attributes:
        operation: Which terminal step failed ("initialize", "draw", "restore")
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        super().__init__(f"Terminal {operation} failed: {cause}")


class ProducerError(StatusPanelError):
    """
    Raised by the EventLoop when a producer forwards a Fatal event.

    Attributes:
        reason: Failure description sent by the producer
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Event producer failed: {reason}")
