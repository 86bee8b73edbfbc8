class Chip8Exception(Exception):
    """
    Base class for all errors raised by the emulator.
    """


class UnknownOpCodeException(Chip8Exception):
    """
    A class to raise unknown op code exceptions. The CPU logs these and
    carries on with the next instruction.
    """
    def __init__(self, op_code):
        Chip8Exception.__init__(self, "Unknown op-code: {:04X}".format(op_code))
        self.op_code = op_code


class MemoryAccessException(Chip8Exception):
    """
    Raised when a read or write falls outside of addressable memory.
    """
    def __init__(self, address):
        Chip8Exception.__init__(
            self, "Memory access out of bounds: {:X}".format(address))
        self.address = address


class StackUnderflowException(Chip8Exception):
    """
    Raised when a return is executed with no frames on the call stack.
    """
    def __init__(self, address=None):
        if address is None:
            message = "Return with an empty call stack"
        else:
            message = "Return with an empty call stack at {:03X}".format(address)
        Chip8Exception.__init__(self, message)
        self.address = address


class RomTooLargeException(Chip8Exception):
    """
    Raised when a ROM does not fit in the memory available for programs.
    """
    def __init__(self, size, limit):
        Chip8Exception.__init__(
            self, "ROM is {} bytes, at most {} bytes fit in memory".format(
                size, limit))
        self.size = size
        self.limit = limit
