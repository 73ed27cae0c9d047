import re
from collections import deque
from datetime import datetime
from typing import Callable, Optional

# https://en.wikipedia.org/wiki/ANSI_escape_code#3-bit_and_4-bit
BBCODE_LIST = {
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bold": "\033[1m",
    "/bold": "\033[22m",
    "underline": "\033[4m",
    "/underline": "\033[24m",
    "normal": "\033[0m",
}

all_tags = list(BBCODE_LIST.keys())
all_tags.extend(
    f"/{k}" for k in BBCODE_LIST if not k.startswith("/") and k != "normal"
)

RE_ANSI = re.compile(
    r"((?:\[raw\])(.*?)(?:\[/raw\]|$)|"
    + r"|".join([r"\[%s\]" % x for x in all_tags])
    + r")",
    re.IGNORECASE,
)


class SimpleLogger:
    def __init__(self, name: str):
        self.name = name

    def warning(self, message: str):
        print(f"[{self.name}-Warning] {message}")


# Logger for channel system
logger = SimpleLogger(__name__)


class Channel:
    """
    Named message sink.

    Anything sent to a channel is formatted (indent, line end, timestamp, bbcode) and
    handed to every watcher. Watchers are plain callables such as `print` or another
    channel. With a buffer, the last messages are replayed to new watchers.

    A channel is falsy when nobody watches it and it keeps no buffer, so callers can
    skip building expensive messages:

        channel = kernel.channel("kerf", timestamp=True)
        channel.watch(print)
        if channel:
            channel(f"{len(contours)} contours")
    """

    def __init__(
        self,
        name: str,
        buffer_size: int = 0,
        line_end: Optional[str] = None,
        timestamp: bool = False,
        ansi: bool = False,
    ):
        self.watchers = []
        self.name = name
        self.buffer_size = buffer_size
        self.line_end = line_end
        self._ = lambda e: e
        self.timestamp = timestamp
        self.buffer = None if buffer_size == 0 else deque(maxlen=buffer_size)
        self.ansi = ansi
        self._call_depth = 0

    def __repr__(self):
        return f"Channel({repr(self.name)}, buffer_size={str(self.buffer_size)}, line_end={repr(self.line_end)})"

    def __call__(
        self,
        message: str,
        *args,
        indent: Optional[bool] = True,
        ansi: Optional[bool] = False,
        **kwargs,
    ):
        if self._call_depth > 10:
            logger.warning(
                f"Channel '{self.name}' recursion limit exceeded, dropping message"
            )
            return
        self._call_depth += 1
        try:
            original_msg = message
            if self.line_end is not None:
                message = message + self.line_end
            if indent:
                message = "    " + message.replace("\n", "\n    ")
            if self.timestamp:
                ts = datetime.now().strftime("[%H:%M:%S] ")
                message = ts + message.replace("\n", f"\n{ts}")
            if ansi:
                if self.ansi:
                    message = self.bbcode_to_ansi(message)
                else:
                    message = self.bbcode_to_plain(message)

            for w in self.watchers[:]:
                self._call_watcher(
                    w, message, indent=indent, ansi=ansi, original_msg=original_msg
                )
            if self.buffer is not None:
                self.buffer.append(message)
        finally:
            self._call_depth -= 1

    def __iadd__(self, other):
        self.watch(other)
        return self

    def __isub__(self, other):
        self.unwatch(other)
        return self

    def __bool__(self):
        return bool(self.watchers) or self.buffer_size != 0

    def bbcode_to_ansi(self, text):
        return "".join(
            [
                BBCODE_LIST["normal"],
                RE_ANSI.sub(self.bbcode_to_ansi_match, text),
                BBCODE_LIST["normal"],
            ]
        )

    def bbcode_to_ansi_match(self, m):
        tag = re.sub(r"\].*", "", m[0])[1:].lower()
        return m[2] if tag == "raw" else BBCODE_LIST.get(tag, BBCODE_LIST["normal"])

    def bbcode_to_plain(self, text):
        def strip(m):
            tag = re.sub(r"\].*", "", m[0])[1:].lower()
            return m[2] if tag == "raw" else ""

        return RE_ANSI.sub(strip, text)

    def watch(self, monitor_function: Callable):
        """
        Add a watcher function to this channel. Buffered messages are replayed to it.
        """
        if monitor_function in self.watchers:
            return
        self.watchers.append(monitor_function)
        if self.buffer is not None:
            for line in list(self.buffer):
                monitor_function(line)

    def _call_watcher(self, watcher, message, indent=None, ansi=None, original_msg=None):
        try:
            if isinstance(watcher, Channel):
                msg_to_send = original_msg if original_msg is not None else message
                watcher(msg_to_send, indent=indent, ansi=ansi)
                return
            watcher(message)
        except Exception as e:
            # One broken watcher must not stop the others.
            logger.warning(
                f"Watcher error in channel '{self.name}': {type(e).__name__}: {e}"
            )

    def unwatch(self, monitor_function: Callable):
        """Remove a watcher function from this channel."""
        if monitor_function in self.watchers:
            self.watchers.remove(monitor_function)
        else:
            logger.warning(
                f"Watcher {monitor_function} not found in channel '{self.name}'"
            )

