import unittest

from chip8.opcode import Opcode


class TestOpcode(unittest.TestCase):
    def test_fields(self):
        opcode = Opcode(0xD12F)
        self.assertEqual(opcode.category, 0xD)
        self.assertEqual(opcode.x, 0x1)
        self.assertEqual(opcode.y, 0x2)
        self.assertEqual(opcode.n, 0xF)

    def test_kk(self):
        self.assertEqual(Opcode(0x6A42).kk(), 0x42)
        self.assertEqual(Opcode(0x71FF).kk(), 0xFF)

    def test_nnn(self):
        self.assertEqual(Opcode(0x1ABC).nnn(), 0xABC)
        self.assertEqual(Opcode(0xA000).nnn(), 0x000)

    def test_every_word_decodes(self):
        opcode = Opcode(0xFFFF)
        self.assertEqual((opcode.category, opcode.x, opcode.y, opcode.n),
                         (0xF, 0xF, 0xF, 0xF))
        opcode = Opcode(0x0000)
        self.assertEqual((opcode.category, opcode.x, opcode.y, opcode.n),
                         (0, 0, 0, 0))

    def test_str(self):
        self.assertEqual(str(Opcode(0x00E0)), "00E0")


if __name__ == "__main__":
    unittest.main()
