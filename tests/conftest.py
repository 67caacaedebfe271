"""
Shared pytest fixtures for the bfc test suite.
"""

import pytest


# Classic two-level multiplication program; prints "Hello World!\n"
HELLO_WORLD = (
    b"++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    b">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

# Same program with comments and layout, exercising the lexer's filter
HELLO_WORLD_COMMENTED = b"""
Set cell 0 to 8 and loop over it
++++++++ [
    >++++ [ >++ >+++ >+++ >+ <<<<- ]    four cells: 2 3 3 1 (times 4)
    >+ >+ >- >>+                       fix ups
    [<] <-                             back to the counter
]
>>.  H
>---.  e
+++++++..+++.  llo
>>.  space
<-.  W
<.+++.------.--------.  orld
>>+.  !
>++.  newline
"""


@pytest.fixture
def hello_world() -> bytes:
    """Fixture: the Hello World program source."""
    return HELLO_WORLD


@pytest.fixture
def hello_world_commented() -> bytes:
    """Fixture: the Hello World program with comments."""
    return HELLO_WORLD_COMMENTED
