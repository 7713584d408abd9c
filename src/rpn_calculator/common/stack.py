"""Fixed-capacity LIFO stacks used by the converter and the evaluator."""
from typing import Generic, List, TypeVar

from rpn_calculator.common.errors import InvalidTokenError, StackOverflowError, StackUnderflowError
from rpn_calculator.common.settings import DEFAULT_LIMITS

T = TypeVar("T")

EMPTY_TOP = -1


class BoundedStack(Generic[T]):
    """
    Last-in-first-out container with a hard capacity.

    A push onto a full stack or a pop/peek on an empty one raises and leaves
    the stack unchanged.
    """

    def __init__(self, capacity: int = DEFAULT_LIMITS.stack_capacity):
        if capacity < 1:
            raise ValueError(f"Stack capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items: List[T] = []

    @property
    def top(self) -> int:
        """Index of the top element, -1 when empty."""
        return len(self._items) - 1

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return self.top == EMPTY_TOP

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def push(self, item: T) -> None:
        if self.is_full():
            raise StackOverflowError(f"Stack is full ({self.capacity} entries)")
        self._items.append(item)

    def pop(self) -> T:
        if self.is_empty():
            raise StackUnderflowError("Cannot pop from an empty stack")
        return self._items.pop()

    def peek(self) -> T:
        if self.is_empty():
            raise StackUnderflowError("Cannot peek into an empty stack")
        return self._items[-1]

    def clear(self) -> None:
        self._items.clear()


class TokenStack(BoundedStack[str]):
    """Operator stack of the infix-to-postfix converter."""

    def __init__(
        self,
        capacity: int = DEFAULT_LIMITS.stack_capacity,
        max_token_length: int = DEFAULT_LIMITS.max_token_length,
    ):
        super().__init__(capacity)
        self.max_token_length = max_token_length

    def push(self, item: str) -> None:
        if len(item) > self.max_token_length:
            raise InvalidTokenError(
                f"Token longer than {self.max_token_length} characters: {item[:16]!r}...",
                token=item,
            )
        super().push(item)


class ValueStack(BoundedStack[float]):
    """Operand stack of the postfix evaluator."""

    def push(self, item: float) -> None:
        super().push(float(item))
