import argparse
import logging
import sys

import os
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from chip8.cpu import CPU
from chip8.exception import Chip8Exception
from chip8.screen import Screen, DEFAULT_RATIO

logger = logging.getLogger(__name__)

# Sets which keys on the keyboard map to the Chip 8 keys. The left hand
# side of a QWERTY keyboard mirrors the layout of the original keypad:
#
#    1 2 3 4        1 2 3 C
#    Q W E R   ->   4 5 6 D
#    A S D F        7 8 9 E
#    Z X C V        A 0 B F
KEY_MAPPINGS = {
    pygame.K_1: 0x1,
    pygame.K_2: 0x2,
    pygame.K_3: 0x3,
    pygame.K_4: 0xC,
    pygame.K_q: 0x4,
    pygame.K_w: 0x5,
    pygame.K_e: 0x6,
    pygame.K_r: 0xD,
    pygame.K_a: 0x7,
    pygame.K_s: 0x8,
    pygame.K_d: 0x9,
    pygame.K_f: 0xE,
    pygame.K_z: 0xA,
    pygame.K_x: 0x0,
    pygame.K_c: 0xB,
    pygame.K_v: 0xF,
}

# The timers count down at 60 Hz, so the host runs 60 frames per second and
# finishes every frame with one full cycle.
FRAME_RATE = 60

# How many instructions to execute per frame by default
INSTRUCTIONS_PER_FRAME = 10


def read_rom(filename):
    with open(filename, 'rb') as rom_file:
        return rom_file.read()


def handle_events(cpu):
    """
    Forward pending keyboard events to the CPU.

    :param cpu: the CPU to send key presses to
    :return: False once the user has asked to quit
    """
    running = True
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                running = False
            elif event.key in KEY_MAPPINGS:
                cpu.key_down(KEY_MAPPINGS[event.key])
        elif event.type == pygame.KEYUP:
            if event.key in KEY_MAPPINGS:
                cpu.key_up(KEY_MAPPINGS[event.key])
    return running


def run_frame(cpu, screen, instructions):
    """
    Execute one frame worth of instructions. The last instruction runs as
    a full cycle so that the timers tick exactly once per frame.
    """
    for _ in range(instructions - 1):
        cpu.execute_instruction(screen)
    cpu.emulate_cycle(screen)


def run_emulator(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    :return: the exit status
    """
    cpu = CPU()
    cpu.load(read_rom(args.rom))
    clock = pygame.time.Clock()

    with Screen(ratio=args.scale) as screen:
        pygame.display.set_caption(os.path.basename(args.rom))
        running = True
        while running:
            clock.tick(FRAME_RATE)
            running = handle_events(cpu)
            if not running:
                break
            try:
                run_frame(cpu, screen, args.instructions)
            except Chip8Exception as error:
                logger.critical("Emulation stopped: %s\n%s", error, cpu)
                return 1
    return 0


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator."
    )
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", help="the scale factor to apply to the display "
                   "(default is {})".format(DEFAULT_RATIO),
        type=int, default=DEFAULT_RATIO, dest="scale")
    parser.add_argument(
        "-i", help="the number of instructions to execute per frame, "
                   "at {} frames per second (default is {})".format(
                       FRAME_RATE, INSTRUCTIONS_PER_FRAME),
        type=int, default=INSTRUCTIONS_PER_FRAME, dest="instructions")
    parser.add_argument(
        "-v", help="log every executed instruction",
        action="store_true", dest="verbose")
    args = parser.parse_args(argv)
    if args.instructions < 1:
        parser.error("the number of instructions per frame must be at least 1")
    return args


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s]:  %(message)s",
        stream=sys.stdout)

    try:
        status = run_emulator(args)
    except (OSError, Chip8Exception) as error:
        logger.critical("Could not start: %s", error)
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
