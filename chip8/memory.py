from chip8.exception import MemoryAccessException

# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where the hexadecimal font is stored
FONT_START = 0x50

# Each font character is 5 bytes tall
FONT_CHARACTER_SIZE = 5

# The built-in hexadecimal font, one 4x5 glyph for each of 0-F
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


class Memory(object):
    """
    The 4K of addressable memory. Addresses 0x000 - 0x1FF belong to the
    interpreter (the font lives at 0x050), programs start at 0x200.

    Every access is bounds checked. The original hardware has no such
    guard, so an access outside of memory raises a MemoryAccessException
    and is treated as fatal for the running program.
    """
    def __init__(self, size=MAX_MEMORY):
        self.memory_size = size
        self.memory_data = bytearray(size)

    def __len__(self):
        return self.memory_size

    def check_address(self, address):
        if not 0 <= address < self.memory_size:
            raise MemoryAccessException(address)

    def read8(self, address):
        self.check_address(address)
        return self.memory_data[address]

    def read16(self, address):
        """
        Read a big-endian 16-bit value from the two bytes at address and
        address + 1.

        :param address: the address of the high byte
        :return: the 16-bit value
        """
        if not 0 <= address < self.memory_size - 1:
            raise MemoryAccessException(address)
        return (self.memory_data[address] << 8) | self.memory_data[address + 1]

    def write8(self, address, value):
        self.check_address(address)
        self.memory_data[address] = value & 0xFF

    def load(self, data, offset):
        """
        Copy a block of bytes into memory. The whole block is checked
        before anything is written, so a failed load leaves memory as it
        was.

        :param data: the bytes to copy
        :param offset: the address of the first byte
        """
        if data:
            self.check_address(offset)
            self.check_address(offset + len(data) - 1)
        self.memory_data[offset:offset + len(data)] = data

    def load_font(self):
        self.load(FONT, FONT_START)

    def clear(self):
        self.memory_data[:] = bytes(self.memory_size)
