"""
Tokens produced by one step of the tokenizer, and the input buffer they come from.

- Terminate       "--" was seen, or the input is exhausted.
- PositionalArg   a token that is not a switch.
- SwitchMatch     a resolved switch with its joined argument (if any).

ArgBuffer is the remaining-input queue of a single parse call. Short switch
clusters are re-scanned by pushing the unread remainder back to its front.
"""
from collections import deque
from typing import NamedTuple, Any


class Terminate(NamedTuple):
    pass


class PositionalArg(NamedTuple):
    value: str


class SwitchMatch(NamedTuple):
    switch: Any
    long_form: bool
    joined: str | None
    negated: bool


class ArgBuffer:
    """
    double-ended token queue scoped to one parse call.
    """

    def __init__(self, tokens=(), /):
        self._tokens = deque(tokens)

    def pop_front(self):
        return self._tokens.popleft()

    def push_front(self, token, /):
        self._tokens.appendleft(token)

    def peek(self):
        """
        return the next token without consuming it, or None when empty.
        """
        return self._tokens[0] if self._tokens else None

    def drain(self):
        """
        consume and return every remaining token, in order.
        """
        tokens = list(self._tokens)
        self._tokens.clear()
        return tokens

    def __bool__(self):
        return bool(self._tokens)

    def __len__(self):
        return len(self._tokens)


__all__ = (
    "Terminate",
    "PositionalArg",
    "SwitchMatch",
    "ArgBuffer",
)
