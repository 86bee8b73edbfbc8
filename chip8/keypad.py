# The number of keys on the Chip 8 keypad
NUM_KEYS = 0x10


class Keypad(object):
    """
    The state of the 16 keys, plus the latch used by the wait-for-key
    instruction.
    """
    def __init__(self):
        self.keys = [False] * NUM_KEYS
        self.latched_key = None

    @staticmethod
    def check_key(key):
        if not 0 <= key < NUM_KEYS:
            raise ValueError("Invalid key: {!r}".format(key))

    def key_down(self, key):
        self.check_key(key)
        self.keys[key] = True

    def key_up(self, key):
        self.check_key(key)
        self.keys[key] = False

    def is_down(self, key):
        self.check_key(key)
        return self.keys[key]

    def any_key_down(self):
        """
        Returns the lowest numbered key that is down, or None.
        """
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key
        return None

    def poll_release(self):
        """
        Wait for a key to be pressed and then released. The first call
        with nothing latched records the first key that is down. Later
        calls return that key, and clear the latch, once it has been
        released.

        :return: the released key, or None if the wait is not over
        """
        if self.latched_key is None:
            self.latched_key = self.any_key_down()
            return None

        if self.keys[self.latched_key]:
            return None

        key, self.latched_key = self.latched_key, None
        return key

    def reset(self):
        self.keys = [False] * NUM_KEYS
        self.latched_key = None
