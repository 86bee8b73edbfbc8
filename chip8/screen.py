from pygame import display, HWSURFACE, DOUBLEBUF, Color, draw

SCREEN_NAME = 'CHIP8 Emulator'

# The height and width of the screen in pixels. Note these are augmented
# by the scaling ratio when the window is opened.
DEFAULT_HEIGHT = 32
DEFAULT_WIDTH = 64

# The default scaling ratio for the window
DEFAULT_RATIO = 10

# The depth of the screen is the number of bits used to represent the color
# of a pixel.
SCREEN_DEPTH = 8

# The colors of the pixels to draw. The Chip 8 supports two colors: 0 (off)
# and 1 (on). The format of the colors is in RGBA format.
PIXEL_COLORS = {
    0: Color(0, 0, 0, 255),
    1: Color(250, 250, 250, 255)
}


class Screen(object):
    """
    A class to emulate a Chip 8 Screen. The original Chip 8 screen was 64 x 32
    with 2 colors. In this emulator, this translates to color 0 (off) and color
    1 (on).

    The pixels live in a buffer owned by the screen. A window is only opened
    by init_display (or by using the screen as a context manager), so the
    screen can also be used without a display. The CPU borrows the screen
    for the duration of a cycle and never keeps pixel data of its own.
    """
    def __init__(self, ratio=DEFAULT_RATIO, screen_height=DEFAULT_HEIGHT,
                 screen_width=DEFAULT_WIDTH):
        """
        Initializes the screen. The scaling ratio is used to modify the
        size of the window, since the original resolution of the Chip 8
        was 64 x 32, which is quite small.

        :param ratio: the scaling factor to apply to the window
        :param screen_height: the height of the screen in pixels
        :param screen_width: the width of the screen in pixels
        """
        self.screen_height = screen_height
        self.screen_width = screen_width
        self.scaling_ratio = ratio
        self.screen_pixels = bytearray(screen_width * screen_height)
        self.screen_surface = None

    def __enter__(self):
        self.init_display()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.quit_display()

    def init_display(self):
        """
        Attempts to initialize a window with the specified height and width.
        The window will by default be of depth SCREEN_DEPTH, and will be
        double-buffered in hardware (if possible).
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((self.screen_width * self.scaling_ratio),
             (self.screen_height * self.scaling_ratio)),
            HWSURFACE | DOUBLEBUF,
            SCREEN_DEPTH)
        display.set_caption(SCREEN_NAME)
        self.refresh()

    def quit_display(self):
        self.screen_surface = None
        display.quit()

    def width(self):
        return self.screen_width

    def height(self):
        return self.screen_height

    def get_pixel(self, x_axis_position, y_axis_position):
        """
        Returns whether the pixel is on (1) or off (0) at the specified
        location.
        """
        return self.screen_pixels[x_axis_position + y_axis_position * self.screen_width]

    def flip_pixel(self, x_axis_position, y_axis_position):
        """
        Toggle the pixel at the specified location. The coordinate system
        starts with (0, 0) being in the top left of the screen. The change
        is not visible until refresh() is called.

        :param x_axis_position: the x coordinate of the pixel
        :param y_axis_position: the y coordinate of the pixel
        :return: True if the pixel is now on, False if it was turned off
        """
        offset = x_axis_position + y_axis_position * self.screen_width
        self.screen_pixels[offset] ^= 1
        return self.screen_pixels[offset] == 1

    def clear(self):
        """
        Turns off all the pixels on the screen.
        """
        self.screen_pixels[:] = bytes(len(self.screen_pixels))

    def refresh(self):
        """
        Paints the pixel buffer onto the window and flips the display. Does
        nothing when no window is open.
        """
        if self.screen_surface is None:
            return

        self.screen_surface.fill(PIXEL_COLORS[0])
        for y_axis_position in range(self.screen_height):
            for x_axis_position in range(self.screen_width):
                if self.get_pixel(x_axis_position, y_axis_position):
                    draw.rect(self.screen_surface,
                              PIXEL_COLORS[1],
                              (x_axis_position * self.scaling_ratio,
                               y_axis_position * self.scaling_ratio,
                               self.scaling_ratio, self.scaling_ratio))
        display.flip()
