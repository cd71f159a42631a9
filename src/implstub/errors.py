"""Exceptions raised while generating interface stubs."""


class ImplStubError(Exception):
    """Base class for all implstub failures."""


class UnparsableInputError(ImplStubError):
    """User input did not match '<recvName> <recvType> <interfaceType>'."""

    def __init__(self, impl_input: str):
        self.impl_input = impl_input
        super().__init__(f"Not parsable input: {impl_input}")


class NoIdentifierError(ImplStubError):
    """No word could be found under the cursor to infer a receiver from."""

    def __init__(self, line: int, character: int):
        self.line = line
        self.character = character
        super().__init__(f"No identifier under cursor at {line}:{character}")


class ToolNotFoundError(ImplStubError):
    """The external code-generation binary is not installed."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Tool not found: {tool}")


class ToolExecutionError(ImplStubError):
    """The external tool ran but failed."""

    def __init__(self, stderr: str, returncode: int | None = None):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"Cannot stub interface: {stderr}")
