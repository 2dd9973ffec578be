"""
Operation contract - The abstract unit of work every use case implements.

An Operation consumes a Command and asynchronously produces an Outcome.
Expected business failures are returned through the Outcome factories;
only genuine defects may raise out of execute().
"""

from abc import ABC, abstractmethod
from typing import Generic, Protocol, TypeVar

from .outcome import Outcome


class Command:
    """
    Marker base class for operation inputs.

    Carries no data itself. Concrete commands are usually frozen dataclasses:

        @dataclass(frozen=True)
        class RenameProject(Command):
            project_id: int
            name: str
    """

    __slots__ = ()


class CancellationSignal(Protocol):
    """
    Port interface for advisory cancellation.

    Satisfied by asyncio.Event and threading.Event. Honoring the signal is up
    to each concrete operation.
    """

    def is_set(self) -> bool:
        """Return True once cancellation was requested."""
        ...


TCommand = TypeVar("TCommand", bound=Command)
TResult = TypeVar("TResult")


class Operation(ABC, Generic[TCommand, TResult]):
    """
    Abstract operation bound to one command type and one result type.

    Concrete subclasses parameterize the contract, which is what the
    registry binds them under:

        class RenameProjectOperation(Operation[RenameProject, Project]):
            async def execute(self, command, cancellation=None):
                ...
    """

    @abstractmethod
    async def execute(
        self,
        command: TCommand,
        cancellation: CancellationSignal | None = None,
    ) -> Outcome[TResult]:
        """
        Execute the operation.

        Args:
            command: Input of the use case
            cancellation: Optional advisory cancellation signal

        Returns:
            Outcome describing success, no-op or the expected failure
        """
        ...
