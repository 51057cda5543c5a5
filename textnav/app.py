import argparse
import logging
import sys

from . import __version__, terminal
from .bookmarks import BookmarkStore
from .config import COLOR_THEMES, load_config, save_config
from .errors import BrowserError, FetchError, PersistenceError
from .fetch import Fetcher
from .history import HistoryLedger
from .navigation import Navigator
from .render import decode_text
from .search import highlight, search
from .viewport import Viewport

logger = logging.getLogger(__name__)

HELP = [
    ("g URL", "Go to URL"),
    ("b", "Show bookmarks"),
    ("a TITLE", "Add current page to bookmarks"),
    ("h", "Show this help"),
    ("history", "Show history"),
    ("r", "Reload current page"),
    ("source", "View page source"),
    ("raw", "Show the whole page without the viewport"),
    ("download FILE", "Download current page"),
    ("search QUERY", "Search in current page"),
    ("settings", "Change scroll step, colors and wrap width"),
    ("w", "Scroll up"),
    ("s", "Scroll down"),
    ("q", "Quit"),
]

ALIASES = {"quit": "q", "help": "h"}


def parse_command(line):
    line = line.strip()
    if not line:
        return "", ""
    head, _, rest = line.partition(" ")
    head = head.lower()
    return ALIASES.get(head, head), rest.strip()


def parse_index(text):
    text = text.strip()
    if not text.isdecimal():
        return None
    return int(text)


def prompt(msg, default="q"):
    """Read a menu line; Ctrl-D or Ctrl-C answers with ``default``."""
    try:
        return input(msg)
    except (EOFError, KeyboardInterrupt):
        print()
        return default


def pause(msg="Enter…"):
    prompt(f"{terminal.C_DIM}{msg}{terminal.C_RESET}", default="")


class Browser:
    """Interactive command loop over a navigator and its stores."""

    def __init__(self, navigator, bookmarks, cfg=None, config_path=None):
        self.nav = navigator
        self.viewport = navigator.viewport
        self.history = navigator.history
        self.bookmarks = bookmarks
        self.cfg = cfg if cfg is not None else load_config(config_path)
        self.config_path = config_path
        if self.nav.on_navigate is None:
            self.nav.on_navigate = self.display_page

    # ========= PAGE VIEW =========
    def display_page(self):
        terminal.clear_screen()
        terminal.bar(" textnav ")
        url = self.nav.current_url or "No URL"
        print(f"{terminal.C_CMD}└─ URL: {url}{terminal.C_RESET}\n")

        height = terminal.viewport_height()
        for line in self.viewport.visible_slice(height):
            terminal.draw_line(f"{line.number:4} │ {line.text}", line.style)

        if not len(self.viewport):
            print(f"{terminal.C_DIM}No page loaded. Type 'g URL' to open one.{terminal.C_RESET}")

        status = f" Lines: {len(self.viewport)} | Position: {self.viewport.offset(height) + 1} "
        if self.nav.status is not None:
            status += f"| HTTP {self.nav.status} "
        terminal.bar(status)
        print(f"\n{terminal.C_DIM}[Press 'h' for help] [w/s to scroll] [q to quit]{terminal.C_RESET}")

    def go(self, target):
        try:
            self.nav.navigate(target)
        except BrowserError as e:
            logger.warning("navigation to %s failed: %s", target, e)
            print(f"{terminal.C_ERR}Error: {e}{terminal.C_RESET}")
            return False
        return True

    def reload(self):
        try:
            self.nav.reload()
        except BrowserError as e:
            print(f"{terminal.C_ERR}Error: {e}{terminal.C_RESET}")

    def scroll(self, down):
        height = terminal.viewport_height()
        if down:
            self.viewport.scroll_down(height)
        else:
            self.viewport.scroll_up(height)
        self.display_page()

    def show_help(self):
        print("Commands:")
        for cmd, text in HELP:
            print(f"{terminal.C_CMD}{cmd:<14}{terminal.C_RESET}- {text}")

    # ========= BOOKMARKS =========
    def add_bookmark(self, title):
        try:
            bookmark = self.bookmarks.add(title, self.nav.current_url)
        except PersistenceError as e:
            print(f"{terminal.C_ERR}Warning: bookmark kept for this session only ({e}){terminal.C_RESET}")
            return
        if bookmark:
            print(f"Bookmark added: {bookmark.title}")

    def bookmark_menu(self):
        while True:
            terminal.clear_screen()
            print(f"{terminal.C_TITLE}=== BOOKMARKS ==={terminal.C_RESET}\n")

            if not len(self.bookmarks):
                print("No bookmarks.")
            for i, b in enumerate(self.bookmarks, 1):
                print(f"{terminal.C_CMD} {i}. {terminal.C_RESET}{b.title} {terminal.C_LINK}({b.url}){terminal.C_RESET}")

            print(f"\n{terminal.C_CMD}number=open  d number=delete  q=back{terminal.C_RESET}")
            c = prompt("\nEnter command: ").strip().lower()

            if c == "q":
                return
            if c.startswith("d"):
                index = parse_index(c[1:])
                if index is None:
                    continue
                try:
                    deleted = self.bookmarks.delete(index)
                except PersistenceError as e:
                    print(f"{terminal.C_ERR}Warning: deletion not saved ({e}){terminal.C_RESET}")
                    pause()
                    continue
                if deleted:
                    print("Bookmark deleted!")
                    pause()
                continue

            index = parse_index(c)
            if index is None:
                continue
            try:
                url = self.bookmarks.get(index).url
            except IndexError:
                continue
            if self.go(url):
                return
            pause()

    # ========= HISTORY =========
    def history_menu(self):
        while True:
            terminal.clear_screen()
            print(f"{terminal.C_TITLE}=== BROWSING HISTORY ==={terminal.C_RESET}\n")

            if not len(self.history):
                print("No history yet.")
            for i, url in enumerate(self.history, 1):
                print(f"{terminal.C_DIM} {i}. {terminal.C_LINK}{url}{terminal.C_RESET}")

            print(f"\n{terminal.C_CMD}number=open  q=back{terminal.C_RESET}")
            c = prompt("\nEnter command: ").strip().lower()

            if c == "q":
                return
            index = parse_index(c)
            if index is None:
                continue
            try:
                url = self.history.get(index)
            except IndexError:
                continue
            if self.go(url):
                return
            pause()

    # ========= SEARCH / SOURCE / RAW =========
    def search_in_page(self, query):
        terminal.clear_screen()
        print(f"{terminal.C_HL} Search Results: \"{query}\" {terminal.C_RESET}\n")

        results = search(self.viewport.lines, query)
        for result in results:
            marked = highlight(result.text, result.spans, terminal.C_HL, terminal.C_RESET)
            print(f"{terminal.C_DIM}{result.line_number:4} │ {terminal.C_RESET}{marked}")

        if not results:
            print(f"{terminal.C_ERR}No matches found.{terminal.C_RESET}")

        pause("\nPress Enter to return...")
        self.display_page()

    def view_source(self):
        terminal.clear_screen()
        print("Page Source:")
        try:
            response = self.nav.fetch_raw()
        except FetchError as e:
            logger.warning("source fetch failed: %s", e)
            response = None

        if response is None:
            print(f"{terminal.C_ERR}Unable to fetch page source{terminal.C_RESET}")
        else:
            print(decode_text(response.body, response.encoding))
        pause("\nPress Enter to return...")
        self.display_page()

    def download(self, filename):
        if not self.nav.current_url:
            print("Nothing to download yet.")
            return
        try:
            response = self.nav.fetch_raw()
            with open(filename, "wb") as f:
                f.write(response.body)
        except (FetchError, OSError) as e:
            print(f"{terminal.C_ERR}Error downloading page: {e}{terminal.C_RESET}")
            return
        logger.info("downloaded %s to %s", self.nav.current_url, filename)
        print(f"Page downloaded to: {filename}")

    def raw_view(self):
        terminal.clear_screen()
        for line in self.viewport.lines:
            print(line)
        print("\nPress any key to return to normal mode...", flush=True)
        terminal.read_key()
        self.display_page()

    # ========= SETTINGS =========
    def apply_settings(self):
        self.viewport.step = self.cfg["SCROLL_STEP"]
        self.nav.width = self.cfg["WRAP_WIDTH"]
        self.nav.safe_mode = self.cfg["SAFE_MODE"]
        terminal.apply_color_theme(self.cfg["COLOR_THEME"])

    def settings_menu(self):
        while True:
            terminal.clear_screen()
            print(f"{terminal.C_TITLE}=== SETTINGS ==={terminal.C_RESET}\n")
            print(f"1. Scroll step: {self.cfg['SCROLL_STEP']}")
            print(f"2. Color theme: {self.cfg['COLOR_THEME']}")
            print(f"3. Wrap width: {self.cfg['WRAP_WIDTH']}")
            print("\nq = back\n")

            c = prompt("> ").strip().lower()
            if c == "q":
                return

            if c == "1":
                val = parse_index(prompt("Scroll step (1–50): "))
                if val is not None and 1 <= val <= 50:
                    self.cfg["SCROLL_STEP"] = val
            elif c == "2":
                for i, name in enumerate(COLOR_THEMES, 1):
                    print(f"{i}. {name}")
                val = parse_index(prompt("> "))
                if val is not None and 1 <= val <= len(COLOR_THEMES):
                    self.cfg["COLOR_THEME"] = COLOR_THEMES[val - 1]
            elif c == "3":
                val = parse_index(prompt("Wrap width (40–300): "))
                if val is not None and 40 <= val <= 300:
                    self.cfg["WRAP_WIDTH"] = val
            else:
                continue

            self.apply_settings()
            save_config(self.cfg, self.config_path)

    # ========= MAIN LOOP =========
    def handle(self, line):
        """Run one command; return False once the user quits."""
        cmd, arg = parse_command(line)

        if cmd == "":
            return True
        if cmd == "q":
            return False
        if cmd == "h":
            self.show_help()
        elif cmd == "g" and arg:
            self.go(arg)
        elif cmd == "r":
            self.reload()
        elif cmd == "w":
            self.scroll(down=False)
        elif cmd == "s":
            self.scroll(down=True)
        elif cmd == "b":
            self.bookmark_menu()
            self.display_page()
        elif cmd == "history":
            self.history_menu()
            self.display_page()
        elif cmd == "a" and arg:
            self.add_bookmark(arg)
        elif cmd == "search" and arg:
            self.search_in_page(arg)
        elif cmd == "source":
            self.view_source()
        elif cmd == "download" and arg:
            self.download(arg)
        elif cmd == "raw":
            self.raw_view()
        elif cmd == "settings":
            self.settings_menu()
            self.display_page()
        else:
            print("Unknown command. Press 'h' for help.")
        return True

    def run(self):
        print("Welcome to textnav!")
        print("Type 'h' for help.")
        while True:
            try:
                line = input("\nCommand: ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not self.handle(line):
                break


def setup_logging(log_file=None, debug=False):
    if not log_file:
        logging.getLogger("textnav").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser():
    parser = argparse.ArgumentParser(prog="textnav", description="Browse web pages as text in the terminal.")
    parser.add_argument("url", nargs="?", default=None, help="Page to open at startup.")
    parser.add_argument("--config", default=None, help="Path to the JSON settings file.")
    parser.add_argument("--bookmarks", default=None, help="Path to the bookmarks file.")
    parser.add_argument("--log-file", default=None, help="Write log records to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_browser(cfg, config_path=None, bookmarks_path=None):
    viewport = Viewport(step=cfg["SCROLL_STEP"])
    navigator = Navigator(
        Fetcher(user_agent=cfg["USER_AGENT"], timeout=cfg["TIMEOUT"]),
        viewport,
        HistoryLedger(),
        width=cfg["WRAP_WIDTH"],
        safe_mode=cfg["SAFE_MODE"],
    )
    bookmarks = BookmarkStore(bookmarks_path or cfg["BOOKMARKS_FILE"]).load()
    terminal.apply_color_theme(cfg["COLOR_THEME"])
    return Browser(navigator, bookmarks, cfg, config_path)


def main(argv=None):
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)
    setup_logging(args.log_file or cfg["LOG_FILE"], args.debug)

    browser = build_browser(cfg, args.config, args.bookmarks)
    if args.url:
        browser.go(args.url)
    browser.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
