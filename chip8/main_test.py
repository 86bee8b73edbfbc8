import os
import tempfile
import unittest
from unittest import mock

import pygame

from chip8.cpu import CPU
from chip8.main import handle_events, parse_arguments, read_rom, run_frame, \
    INSTRUCTIONS_PER_FRAME, KEY_MAPPINGS


class TestArguments(unittest.TestCase):
    def test_defaults(self):
        args = parse_arguments(["game.ch8"])
        self.assertEqual(args.rom, "game.ch8")
        self.assertEqual(args.instructions, INSTRUCTIONS_PER_FRAME)
        self.assertFalse(args.verbose)

    def test_options(self):
        args = parse_arguments(["-s", "4", "-i", "20", "-v", "game.ch8"])
        self.assertEqual(args.scale, 4)
        self.assertEqual(args.instructions, 20)
        self.assertTrue(args.verbose)

    def test_instructions_must_be_positive(self):
        with mock.patch('sys.stderr'):
            with self.assertRaises(SystemExit):
                parse_arguments(["-i", "0", "game.ch8"])


class TestHost(unittest.TestCase):
    def test_key_mappings_cover_keypad(self):
        self.assertEqual(sorted(KEY_MAPPINGS.values()), list(range(16)))

    def test_read_rom(self):
        with tempfile.TemporaryDirectory() as directory:
            filename = os.path.join(directory, "test.ch8")
            with open(filename, 'wb') as rom_file:
                rom_file.write(b'\x00\xE0')
            self.assertEqual(read_rom(filename), b'\x00\xE0')

    def test_run_frame_ticks_timers_once(self):
        cpu = mock.Mock()
        screen = mock.Mock()
        run_frame(cpu, screen, 5)
        self.assertEqual(cpu.execute_instruction.call_count, 4)
        cpu.emulate_cycle.assert_called_once_with(screen)

    @mock.patch('chip8.main.pygame.event.get')
    def test_key_events_reach_keypad(self, get_events):
        cpu = CPU()
        get_events.return_value = [
            mock.Mock(type=pygame.KEYDOWN, key=pygame.K_q),
            mock.Mock(type=pygame.KEYDOWN, key=pygame.K_v),
            mock.Mock(type=pygame.KEYUP, key=pygame.K_v),
        ]
        self.assertTrue(handle_events(cpu))
        self.assertTrue(cpu.keypad.is_down(0x4))
        self.assertFalse(cpu.keypad.is_down(0xF))

    @mock.patch('chip8.main.pygame.event.get')
    def test_quit_events(self, get_events):
        cpu = CPU()
        get_events.return_value = [mock.Mock(type=pygame.QUIT)]
        self.assertFalse(handle_events(cpu))
        get_events.return_value = [mock.Mock(type=pygame.KEYDOWN, key=pygame.K_ESCAPE)]
        self.assertFalse(handle_events(cpu))


if __name__ == "__main__":
    unittest.main()
