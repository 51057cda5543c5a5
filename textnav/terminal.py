import contextlib
import os
import shutil
import sys
import termios
import tty

from .viewport import HEADING, LINK

# Rows used around the page body: header, URL line, blank, status bar,
# blank, hint line and the prompt.
CHROME_ROWS = 7


# ========= COLORS =========
def apply_color_theme(name="default"):
    global C_RESET, C_TITLE, C_LINK, C_CMD, C_ERR, C_DIM, C_TEXT, C_HL, C_BAR

    if name == "night":
        C_RESET = "\033[0m"
        C_TITLE = "\033[38;5;250m"
        C_LINK  = "\033[38;5;180m"
        C_CMD   = "\033[38;5;65m"
        C_ERR   = "\033[38;5;131m"
        C_DIM   = "\033[38;5;240m"
        C_TEXT  = "\033[38;5;245m"
        C_HL    = "\033[48;5;58m\033[38;5;250m"
        C_BAR   = "\033[48;5;236m\033[38;5;250m"
    else:
        C_RESET = "\033[0m"
        C_TITLE = "\033[96m"
        C_LINK  = "\033[94m"
        C_CMD   = "\033[92m"
        C_ERR   = "\033[91m"
        C_DIM   = "\033[90m"
        C_TEXT  = "\033[0m"
        C_HL    = "\033[43m\033[30m"
        C_BAR   = "\033[44m\033[97m"


apply_color_theme()


def style_color(style):
    if style == HEADING:
        return C_TITLE
    if style == LINK:
        return C_LINK
    return C_TEXT


# ========= SCREEN =========
def clear_screen():
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def size():
    return shutil.get_terminal_size((80, 24))


def viewport_height():
    return max(1, size().lines - CHROME_ROWS)


def draw_line(text, style=None):
    print(f"{style_color(style)}{text}{C_RESET}")


def bar(text):
    cols = size().columns
    print(f"{C_BAR}{text}{' ' * max(0, cols - len(text))}{C_RESET}")


# ========= RAW MODE =========
@contextlib.contextmanager
def raw_mode(fd=None):
    """Put the tty in raw mode for the duration of the block.

    The saved attributes are restored on every exit path. Without a tty
    the block runs unchanged.
    """
    if fd is None:
        fd = sys.stdin.fileno()
    if not os.isatty(fd):
        yield False
        return
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield True
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def read_key():
    if not sys.stdin.isatty():
        return sys.stdin.readline()[:1]
    with raw_mode():
        return sys.stdin.read(1)
