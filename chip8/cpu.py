import logging
from random import randint

from chip8.exception import RomTooLargeException, StackUnderflowException, \
    UnknownOpCodeException
from chip8.keypad import Keypad
from chip8.memory import Memory, MAX_MEMORY, FONT_START, FONT_CHARACTER_SIZE
from chip8.opcode import Opcode
from chip8.registers import ProgramCounter, Stack, Timer, PROGRAM_COUNTER_START

logger = logging.getLogger(__name__)

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# The register used as the carry, borrow and collision flag
FLAG_REGISTER = 0xF

# The largest ROM that fits between the program start and the end of memory
MAX_ROM_SIZE = MAX_MEMORY - PROGRAM_COUNTER_START

# Every sprite row is one byte wide
SPRITE_WIDTH = 8

# C L A S S E S ###############################################################


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    As usual, a simple Google search will find you other excellent examples.
    To summarize these sources, the Chip 8 has:

        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 16-bit index register (I)
        * 1 x call stack of return addresses
        * 1 x 16-bit program counter (PC)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)

    ** VF is a special register - it is used to store the carry, borrow and
    collision flags

    The CPU does not own the screen. The host passes it in to each call of
    execute_instruction or emulate_cycle, and the CPU lets go of it again
    once the instruction is done.
    """
    def __init__(self):
        # There are two timer registers, one for sound and one that is general
        # purpose known as the delay timer. Both are ticked once per cycle.
        self.timers = {
            'delay': Timer(),
            'sound': Timer(),
        }

        # Defines the general purpose and index registers.
        self.registers = {
            'v': [],
            'index': 0,
        }

        # The operation_lookup table is executed according to the most
        # significant nibble of the operand (e.g. operand 8nnn would call
        # self.execute_logical_instruction)
        self.operation_lookup = {
            0x0: self.clear_return,                  # see subfunctions below
            0x1: self.jump_to_address,               # 1nnn - JUMP nnn
            0x2: self.jump_to_subroutine,            # 2nnn - CALL nnn
            0x3: self.skip_if_reg_equal_val,         # 3xkk - SKE  Vx, kk
            0x4: self.skip_if_reg_not_equal_val,     # 4xkk - SKNE Vx, kk
            0x5: self.skip_if_reg_equal_reg,         # 5xy0 - SKE  Vx, Vy
            0x6: self.move_value_to_reg,             # 6xkk - LOAD Vx, kk
            0x7: self.add_value_to_reg,              # 7xkk - ADD  Vx, kk
            0x8: self.execute_logical_instruction,   # see subfunctions below
            0x9: self.skip_if_reg_not_equal_reg,     # 9xy0 - SKNE Vx, Vy
            0xA: self.load_index_reg_with_value,     # Annn - LOAD I, nnn
            0xB: self.jump_to_v0_plus_value,         # Bnnn - JUMP V0 + nnn
            0xC: self.generate_random_number,        # Cxkk - RAND Vx, kk
            0xD: self.draw_sprite,                   # Dxyn - DRAW Vx, Vy, n
            0xE: self.keyboard_routines,             # see subfunctions below
            0xF: self.misc_routines,                 # see subfunctions below
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with 0. Only the low byte selects the operation, and the
        # x nibble must be 0.
        self.system_operation_lookup = {
            0xE0: self.clear_screen,                 # 00E0 - CLS
            0xEE: self.return_from_subroutine,       # 00EE - RTS
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with 8 (e.g. operand 8xy0 would call
        # self.move_reg_into_reg)
        self.logical_operation_lookup = {
            0x0: self.move_reg_into_reg,             # 8xy0 - LOAD Vx, Vy
            0x1: self.logical_or,                    # 8xy1 - OR   Vx, Vy
            0x2: self.logical_and,                   # 8xy2 - AND  Vx, Vy
            0x3: self.exclusive_or,                  # 8xy3 - XOR  Vx, Vy
            0x4: self.add_reg_to_reg,                # 8xy4 - ADD  Vx, Vy
            0x5: self.subtract_reg_from_reg,         # 8xy5 - SUB  Vx, Vy
            0x6: self.right_shift_reg,               # 8xy6 - SHR  Vx, Vy
            0x7: self.subtract_reg_from_reg1,        # 8xy7 - SUBN Vx, Vy
            0xE: self.left_shift_reg,                # 8xyE - SHL  Vx, Vy
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with E (e.g. operand Ex9E would call
        # self.skip_if_key_pressed)
        self.keyboard_routine_lookup = {
            0x9E: self.skip_if_key_pressed,          # Ex9E - SKPR Vx
            0xA1: self.skip_if_key_not_pressed,      # ExA1 - SKUP Vx
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with F (e.g. operand Fx07 would call
        # self.move_delay_timer_into_reg)
        self.misc_routine_lookup = {
            0x07: self.move_delay_timer_into_reg,    # Fx07 - LOAD Vx, DELAY
            0x0A: self.wait_for_keypress,            # Fx0A - KEYD Vx
            0x15: self.move_reg_into_delay_timer,    # Fx15 - LOAD DELAY, Vx
            0x18: self.move_reg_into_sound_timer,    # Fx18 - LOAD SOUND, Vx
            0x1E: self.add_reg_into_index,           # Fx1E - ADD  I, Vx
            0x29: self.load_index_with_reg_sprite,   # Fx29 - LOAD I, Vx
            0x33: self.store_bcd_in_memory,          # Fx33 - BCD
            0x55: self.store_regs_in_memory,         # Fx55 - STOR [I], Vx
            0x65: self.read_regs_from_memory,        # Fx65 - LOAD Vx, [I]
        }
        self.operand = 0
        self.fetch_address = PROGRAM_COUNTER_START
        self.opcode = Opcode(0)
        self.screen = None
        self.memory = Memory()
        self.program_counter = ProgramCounter()
        self.stack = Stack()
        self.keypad = Keypad()
        self.reset()

    def __str__(self):
        # The operand is None when the fetch itself failed
        operand = '----' if self.operand is None else '{:04X}'.format(self.operand)
        val = 'PC: {:4X}  OP: {}\n'.format(self.fetch_address, operand)
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.registers['v'][index])
        val += 'I: {:4X}\n'.format(self.registers['index'])
        return val

    def emulate_cycle(self, screen):
        """
        Run one full machine cycle: execute the next instruction and then
        tick the delay and sound timers once.

        :param screen: the screen to draw on during this cycle
        :return: returns the operand executed
        """
        operand = self.execute_instruction(screen)
        self.decrement_timers()
        return operand

    def execute_instruction(self, screen, operand=None):
        """
        Execute the next instruction pointed to by the program counter.
        For testing purposes, pass the operand directly to the
        function. When the operand is not passed directly to the
        function, the program counter is increased by 2.

        Unknown operands are logged and otherwise skipped. Memory and
        stack faults propagate to the caller.

        :param screen: the screen to draw on during this instruction
        :param operand: the operand to execute
        :return: returns the operand executed
        """
        self.fetch_address = self.program_counter.get()
        if operand is None:
            self.operand = None
            operand = self.memory.read16(self.fetch_address)
            self.program_counter.increment()
        self.operand = operand
        self.opcode = Opcode(operand)
        logger.debug("%03X: %s", self.fetch_address, self.opcode)

        self.screen = screen
        try:
            self.operation_lookup[self.opcode.category]()
        except UnknownOpCodeException as error:
            logger.warning("%s at %03X", error, self.fetch_address)
        finally:
            self.screen = None
        return self.operand

    def clear_return(self):
        """
        Opcodes starting with a 0 are one of the following instructions:

            0nnn - Jump to machine code function (unsupported)
            00E0 - Clear the display
            00EE - Return from subroutine
        """
        if self.opcode.x != 0:
            raise UnknownOpCodeException(self.operand)
        self.lookup(self.system_operation_lookup, self.opcode.kk())()

    def execute_logical_instruction(self):
        """
        Execute the logical instruction based upon the current operand.
        The lowest nibble selects the operation.
        """
        self.lookup(self.logical_operation_lookup, self.opcode.n)()

    def keyboard_routines(self):
        """
        Run the specified keyboard routine based upon the operand. These
        operations are:

            Ex9E - SKPR Vx
            ExA1 - SKUP Vx
        """
        self.lookup(self.keyboard_routine_lookup, self.opcode.kk())()

    def misc_routines(self):
        """
        Will execute one of the routines specified in misc_routine_lookup.
        """
        self.lookup(self.misc_routine_lookup, self.opcode.kk())()

    def lookup(self, table, key):
        try:
            return table[key]
        except KeyError:
            raise UnknownOpCodeException(self.operand)

    def clear_screen(self):
        """
        00E0 - CLS

        Turn off every pixel on the screen.
        """
        self.screen.clear()

    def return_from_subroutine(self):
        """
        00EE - RTS

        Return from subroutine. Pop the return address off of the stack and
        continue from there. Returning with an empty stack is fatal.
        """
        if not self.stack:
            raise StackUnderflowException(self.fetch_address)
        self.program_counter.set(self.stack.pop())

    def jump_to_address(self):
        """
        1nnn - JUMP nnn

        Jump to address. The address to jump to is calculated using the bits
        taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.program_counter.set(self.opcode.nnn())

    def jump_to_subroutine(self):
        """
        2nnn - CALL nnn

        Jump to subroutine. Save the current program counter on the stack. The
        subroutine to jump to is taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.stack.push(self.program_counter.get())
        self.program_counter.set(self.opcode.nnn())

    def skip_if_reg_equal_val(self):
        """
        3xkk - SKE Vx, kk

        Skip if register contents equal to constant value. The calculation for
        the register and constant is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant

        The program counter is updated to skip the next instruction by
        advancing it by 2 bytes.
        """
        if self.registers['v'][self.opcode.x] == self.opcode.kk():
            self.program_counter.increment()

    def skip_if_reg_not_equal_val(self):
        """
        4xkk - SKNE Vx, kk

        Skip if register contents not equal to constant value. The calculation
        for the register and constant is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant
        """
        if self.registers['v'][self.opcode.x] != self.opcode.kk():
            self.program_counter.increment()

    def skip_if_reg_equal_reg(self):
        """
        5xy0 - SKE Vx, Vy

        Skip if source register is equal to target register. The calculation
        for the registers to use is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.opcode.n != 0:
            raise UnknownOpCodeException(self.operand)
        if self.registers['v'][self.opcode.x] == self.registers['v'][self.opcode.y]:
            self.program_counter.increment()

    def move_value_to_reg(self):
        """
        6xkk - LOAD Vx, kk

        Move the constant value into the specified register. The calculation
        for the registers is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        self.registers['v'][self.opcode.x] = self.opcode.kk()

    def add_value_to_reg(self):
        """
        7xkk - ADD Vx, kk

        Add the constant value to the specified register. The result wraps
        around at 256 and VF is left alone.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        target = self.opcode.x
        self.registers['v'][target] = (self.registers['v'][target] + self.opcode.kk()) & 0xFF

    def move_reg_into_reg(self):
        """
        8xy0 - LOAD Vx, Vy

        Move the value of the source register into the value of the target
        register. The calculation for the registers is performed on the
        operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      0
        """
        self.registers['v'][self.opcode.x] = self.registers['v'][self.opcode.y]

    def logical_or(self):
        """
        8xy1 - OR   Vx, Vy

        Perform a logical OR operation between the source and the target
        register, and store the result in the target register. VF is
        cleared. The register calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      1
        """
        self.registers['v'][self.opcode.x] |= self.registers['v'][self.opcode.y]
        self.registers['v'][FLAG_REGISTER] = 0

    def logical_and(self):
        """
        8xy2 - AND  Vx, Vy

        Perform a logical AND operation between the source and the target
        register, and store the result in the target register. VF is
        cleared.
        """
        self.registers['v'][self.opcode.x] &= self.registers['v'][self.opcode.y]
        self.registers['v'][FLAG_REGISTER] = 0

    def exclusive_or(self):
        """
        8xy3 - XOR  Vx, Vy

        Perform a logical XOR operation between the source and the target
        register, and store the result in the target register. VF is
        cleared.
        """
        self.registers['v'][self.opcode.x] ^= self.registers['v'][self.opcode.y]
        self.registers['v'][FLAG_REGISTER] = 0

    def add_reg_to_reg(self):
        """
        8xy4 - ADD  Vx, Vy

        Add the value in the source register to the value in the target
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      4

        If a carry is generated, set a carry flag in register VF.
        """
        temp = self.registers['v'][self.opcode.x] + self.registers['v'][self.opcode.y]
        self.registers['v'][self.opcode.x] = temp & 0xFF
        self.registers['v'][FLAG_REGISTER] = 1 if temp > 0xFF else 0

    def subtract_reg_from_reg(self):
        """
        8xy5 - SUB  Vx, Vy

        Subtract the value in the source register from the value in the target
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      5

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        target_reg = self.registers['v'][self.opcode.x]
        source_reg = self.registers['v'][self.opcode.y]
        self.registers['v'][self.opcode.x] = (target_reg - source_reg) & 0xFF
        self.registers['v'][FLAG_REGISTER] = 1 if target_reg >= source_reg else 0

    def right_shift_reg(self):
        """
        8xy6 - SHR  Vx, Vy

        Copy the source register into the target register and shift it 1
        bit to the right. Bit 0 will be shifted into register VF. The
        register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      6
        """
        value = self.registers['v'][self.opcode.y]
        self.registers['v'][self.opcode.x] = value >> 1
        self.registers['v'][FLAG_REGISTER] = value & 0x1

    def subtract_reg_from_reg1(self):
        """
        8xy7 - SUBN Vx, Vy

        Subtract the value in the target register from the value in the source
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      7

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        target_reg = self.registers['v'][self.opcode.x]
        source_reg = self.registers['v'][self.opcode.y]
        self.registers['v'][self.opcode.x] = (source_reg - target_reg) & 0xFF
        self.registers['v'][FLAG_REGISTER] = 1 if source_reg >= target_reg else 0

    def left_shift_reg(self):
        """
        8xyE - SHL  Vx, Vy

        Copy the source register into the target register and shift it 1
        bit to the left. Bit 7 will be shifted into register VF. The
        register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      E
        """
        value = self.registers['v'][self.opcode.y]
        self.registers['v'][self.opcode.x] = (value << 1) & 0xFF
        self.registers['v'][FLAG_REGISTER] = (value & 0x80) >> 7

    def skip_if_reg_not_equal_reg(self):
        """
        9xy0 - SKNE Vx, Vy

        Skip if source register is not equal to target register. The
        calculation for the registers to use is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.opcode.n != 0:
            raise UnknownOpCodeException(self.operand)
        if self.registers['v'][self.opcode.x] != self.registers['v'][self.opcode.y]:
            self.program_counter.increment()

    def load_index_reg_with_value(self):
        """
        Annn - LOAD I, nnn

        Load index register with constant value. The calculation for the
        constant value is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   constant  constant  constant
        """
        self.registers['index'] = self.opcode.nnn()

    def jump_to_v0_plus_value(self):
        """
        Bnnn - JUMP V0 + nnn

        Load the program counter with the address in the operand plus the
        value of register V0.

           Bits:  15-12     11-8      7-4       3-0
                  unused   address  address  address
        """
        self.program_counter.set(self.opcode.nnn() + self.registers['v'][0])

    def generate_random_number(self):
        """
        Cxkk - RAND Vx, kk

        A random number between 0 and 255 is generated. The contents of it are
        then ANDed with the constant value passed in the operand. The result is
        stored in the target register. The register and constant values are
        calculated as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target    value    value
        """
        self.registers['v'][self.opcode.x] = self.opcode.kk() & randint(0, 255)

    def draw_sprite(self):
        """
        Dxyn - DRAW Vx, Vy, num_bytes

        Draws the sprite pointed to in the index register at the specified
        x and y coordinates. Drawing is done via an XOR routine, meaning that
        if the target pixel is already turned on, and a pixel is set to be
        turned on at that same location via the draw, then the pixel is turned
        off. Each sprite is 8 bits (1 byte) wide. The num_bytes parameter
        sets how tall the sprite is. Consecutive bytes in the memory pointed
        to by the index register make up the rows of the sprite. Each bit in
        the sprite byte determines whether a pixel is flipped (1) or left
        alone (0). For example, assume that the index register pointed to
        the following 7 bytes:

                       bit 0 1 2 3 4 5 6 7

           byte 0          0 1 1 1 1 1 0 0
           byte 1          0 1 0 0 0 0 0 0
           byte 2          0 1 0 0 0 0 0 0
           byte 3          0 1 1 1 1 1 0 0
           byte 4          0 1 0 0 0 0 0 0
           byte 5          0 1 0 0 0 0 0 0
           byte 6          0 1 1 1 1 1 0 0

        This would draw a character on the screen that looks like an 'E'.

        The starting coordinates wrap around the screen, but the sprite
        itself is clipped at the right and bottom edges. If drawing the
        sprite turns any pixel off, then VF will be set to 1, otherwise it
        is set to 0. The screen is refreshed once the sprite is drawn.

           Bits:  15-12     11-8      7-4       3-0
                  unused    x_source  y_source  num_bytes
        """
        screen_width = self.screen.width()
        screen_height = self.screen.height()
        x_pos = self.registers['v'][self.opcode.x] % screen_width
        y_pos = self.registers['v'][self.opcode.y] % screen_height
        self.registers['v'][FLAG_REGISTER] = 0

        for y_index in range(self.opcode.n):
            y_coord = y_pos + y_index
            if y_coord >= screen_height:
                break

            sprite_byte = self.memory.read8(self.registers['index'] + y_index)
            for x_index in range(SPRITE_WIDTH):
                x_coord = x_pos + x_index
                if x_coord >= screen_width:
                    break

                if sprite_byte & (0x80 >> x_index):
                    if not self.screen.flip_pixel(x_coord, y_coord):
                        self.registers['v'][FLAG_REGISTER] = 1

        self.screen.refresh()

    def skip_if_key_pressed(self):
        """
        Ex9E - SKPR Vx

        Skip the next instruction if the key named by the low nibble of the
        source register is down.

           Bits:  15-12    11-8      7-4       3-0
                  unused   source     9         E
        """
        key = self.registers['v'][self.opcode.x] & 0xF
        if self.keypad.is_down(key):
            self.program_counter.increment()

    def skip_if_key_not_pressed(self):
        """
        ExA1 - SKUP Vx

        Skip the next instruction if the key named by the low nibble of the
        source register is up.

           Bits:  15-12    11-8      7-4       3-0
                  unused   source     A         1
        """
        key = self.registers['v'][self.opcode.x] & 0xF
        if not self.keypad.is_down(key):
            self.program_counter.increment()

    def move_delay_timer_into_reg(self):
        """
        Fx07 - LOAD Vx, DELAY

        Move the value of the delay timer into the target register. The
        register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         7
        """
        self.registers['v'][self.opcode.x] = self.timers['delay'].get()

    def wait_for_keypress(self):
        """
        Fx0A - KEYD Vx

        Wait until a key is pressed and released, then move the value of
        that key into the target register. The CPU does not block: while
        the wait is not over, the program counter is stepped back so that
        this instruction runs again on the next cycle. The timers keep
        ticking in the meantime.

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         A
        """
        key = self.keypad.poll_release()
        if key is None:
            self.program_counter.decrement()
        else:
            self.registers['v'][self.opcode.x] = key

    def move_reg_into_delay_timer(self):
        """
        Fx15 - LOAD DELAY, Vx

        Move the value stored in the specified source register into the delay
        timer. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         5
        """
        self.timers['delay'].set(self.registers['v'][self.opcode.x])

    def move_reg_into_sound_timer(self):
        """
        Fx18 - LOAD SOUND, Vx

        Move the value stored in the specified source register into the sound
        timer. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         8
        """
        self.timers['sound'].set(self.registers['v'][self.opcode.x])

    def add_reg_into_index(self):
        """
        Fx1E - ADD  I, Vx

        Add the value of the register into the index register value. VF is
        not affected. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         E
        """
        self.registers['index'] = (self.registers['index'] + self.registers['v'][self.opcode.x]) & 0xFFFF

    def load_index_with_reg_sprite(self):
        """
        Fx29 - LOAD I, Vx

        Load the index with the font sprite indicated in the source register.
        All sprites are 5 bytes long, so the location of the specified sprite
        is its index multiplied by 5, counted from the start of the font.
        The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     2         9
        """
        self.registers['index'] = self.registers['v'][self.opcode.x] * FONT_CHARACTER_SIZE + FONT_START

    def store_bcd_in_memory(self):
        """
        Fx33 - BCD

        Take the value stored in source and place the digits in the following
        locations:

            hundreds   -> self.memory[index]
            tens       -> self.memory[index + 1]
            ones       -> self.memory[index + 2]

        For example, if the value is 123, then the following values will be
        placed at the specified locations:

             1 -> self.memory[index]
             2 -> self.memory[index + 1]
             3 -> self.memory[index + 2]

        The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     3         3
        """
        value = self.registers['v'][self.opcode.x]
        index = self.registers['index']
        self.memory.write8(index, value // 100)
        self.memory.write8(index + 1, (value // 10) % 10)
        self.memory.write8(index + 2, value % 10)

    def store_regs_in_memory(self):
        """
        Fx55 - STOR [I], Vx

        Store the V registers V0 through Vx in the memory pointed to by the
        index register. The index register is left pointing just past the
        last byte written. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     5         5

        For example, to store all of the V registers, x would be 'F'.
        """
        for counter in range(self.opcode.x + 1):
            self.memory.write8(self.registers['index'] + counter,
                               self.registers['v'][counter])
        self.registers['index'] += self.opcode.x + 1

    def read_regs_from_memory(self):
        """
        Fx65 - LOAD Vx, [I]

        Read the V registers V0 through Vx from the memory pointed to by the
        index register. The index register is left pointing just past the
        last byte read. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     6         5
        """
        for counter in range(self.opcode.x + 1):
            self.registers['v'][counter] = \
                    self.memory.read8(self.registers['index'] + counter)
        self.registers['index'] += self.opcode.x + 1

    def key_down(self, key):
        self.keypad.key_down(key)

    def key_up(self, key):
        self.keypad.key_up(key)

    def reset(self):
        """
        Reset the CPU by blanking out all registers, memory and the stack,
        reloading the font and resetting the program counter to its
        starting value.
        """
        self.registers['v'] = [0] * NUM_REGISTERS
        self.registers['index'] = 0
        self.program_counter.set(PROGRAM_COUNTER_START)
        self.fetch_address = PROGRAM_COUNTER_START
        self.operand = 0
        self.stack.clear()
        self.keypad.reset()
        self.timers['delay'].set(0)
        self.timers['sound'].set(0)
        self.memory.clear()
        self.memory.load_font()

    def load(self, rom_data):
        """
        Load a ROM image into memory at the program start address. A ROM
        that does not fit is rejected before anything is written.

        :param rom_data: the bytes of the ROM
        """
        if len(rom_data) > MAX_ROM_SIZE:
            raise RomTooLargeException(len(rom_data), MAX_ROM_SIZE)
        self.memory.load(rom_data, PROGRAM_COUNTER_START)
        logger.debug("Loaded %d byte ROM at %03X", len(rom_data), PROGRAM_COUNTER_START)

    def decrement_timers(self):
        """
        Decrement both the sound and delay timer.
        """
        self.timers['delay'].tick()
        self.timers['sound'].tick()
