import logging

from chip8.exception import StackUnderflowException

logger = logging.getLogger(__name__)

# Where the program counter should originally point
PROGRAM_COUNTER_START = 0x200

# How many return addresses the original hardware could hold
STACK_DEPTH = 16


class ProgramCounter(object):
    """
    The address of the next instruction to fetch. Each instruction is 2
    bytes wide.
    """
    def __init__(self, start=PROGRAM_COUNTER_START):
        self.counter = start

    def get(self):
        return self.counter

    def set(self, address):
        self.counter = address & 0xFFFF

    def increment(self):
        self.counter = (self.counter + 2) & 0xFFFF

    def decrement(self):
        """
        Step back one instruction so that the instruction just fetched is
        fetched again on the next cycle.
        """
        self.counter = (self.counter - 2) & 0xFFFF


class Stack(object):
    """
    The call stack of return addresses. It grows past STACK_DEPTH with a
    warning; returning with nothing on it raises StackUnderflowException.
    """
    def __init__(self):
        self.stack_data = []

    def __len__(self):
        return len(self.stack_data)

    def push(self, address):
        self.stack_data.append(address)
        if len(self.stack_data) > STACK_DEPTH:
            logger.warning("Call stack depth %d exceeds %d frames",
                           len(self.stack_data), STACK_DEPTH)

    def pop(self):
        if not self.stack_data:
            raise StackUnderflowException()
        return self.stack_data.pop()

    def clear(self):
        del self.stack_data[:]


class Timer(object):
    """
    An 8-bit countdown register. It is decremented once per tick and
    stops at zero.
    """
    def __init__(self):
        self.value = 0

    def get(self):
        return self.value

    def set(self, value):
        self.value = value & 0xFF

    def tick(self):
        if self.value > 0:
            self.value -= 1
