# Masks used to split an operand into its nibbles
CATEGORY_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F

# Masks for the derived immediate values
BYTE_MASK = 0x00FF
ADDRESS_MASK = 0x0FFF


class Opcode(object):
    """
    A decoded 16-bit instruction. Every operand decodes to some set of
    fields; whether the fields name a real instruction is up to the CPU.

           Bits:  15-12     11-8      7-4       3-0
                 category     x        y         n
    """
    def __init__(self, operand):
        self.operand = operand & 0xFFFF
        self.category = (self.operand & CATEGORY_MASK) >> 12
        self.x = (self.operand & X_MASK) >> 8
        self.y = (self.operand & Y_MASK) >> 4
        self.n = self.operand & N_MASK

    def __str__(self):
        return '{:04X}'.format(self.operand)

    def kk(self):
        """
        The low byte of the operand, used as an 8-bit constant.
        """
        return (self.y << 4) | self.n

    def nnn(self):
        """
        The low 12 bits of the operand, used as an address.
        """
        return self.operand & ADDRESS_MASK
