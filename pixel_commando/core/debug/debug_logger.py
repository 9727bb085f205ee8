"""
debug_logger.py
---------------
Category-filtered console diagnostics for Pixel Commando.

Every line carries the source class, a tag and (optionally) a timestamp:

    [12:04:51] [AdBroker][STATE] Rewarded ad resolved: granted

Verbosity and the per-category switches default to LoggerConfig and can
be overridden from the ``logging`` section of game.yaml.
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Which subsystems log, and how much."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE

    CATEGORIES = {
        "system": True,
        "loading": False,
        "input": False,
        "render": False,
        "event_manager": False,

        "game_state": True,
        "level": True,
        "combat": True,
        "collision": False,

        "progress": True,
        "ads": True,
        "audio": False,
    }

    SHOW_TIMESTAMP = True
    SHOW_SOURCE = True

    @classmethod
    def configure(cls, settings):
        """
        Apply a ``logging`` config section.

        Recognised keys: enabled (bool), level (str), timestamps (bool),
        categories (mapping of category -> bool). Unknown levels and
        categories are reported and skipped.
        """
        if not isinstance(settings, dict):
            return

        if "enabled" in settings:
            cls.ENABLE_LOGGING = bool(settings["enabled"])
        if "timestamps" in settings:
            cls.SHOW_TIMESTAMP = bool(settings["timestamps"])

        level = str(settings.get("level", cls.LOG_LEVEL)).upper()
        if level in DebugLogger.LEVEL_VALUES:
            cls.LOG_LEVEL = level
        else:
            DebugLogger.warn(f"Unknown log level '{level}'")

        for name, on in (settings.get("categories") or {}).items():
            if name not in cls.CATEGORIES:
                DebugLogger.warn(f"Unknown log category '{name}'")
                continue
            cls.CATEGORIES[name] = bool(on)


# ===========================================================
# ANSI Colors
# ===========================================================

class Colors:
    RESET = "\033[0m"
    WHITE = "\033[97m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


# ===========================================================
# Debug Logger
# ===========================================================

class DebugLogger:
    """Static logger; call the tag methods directly, never instantiate."""

    LINE_LENGTH = 59

    LEVEL_VALUES = {
        "NONE": 0,
        "ERROR": 1,
        "WARN": 2,
        "INFO": 3,
        "VERBOSE": 4,
    }

    # tag -> (color, minimum level)
    TAGS = {
        "INIT": (Colors.WHITE, "INFO"),
        "SYSTEM": (Colors.MAGENTA, "INFO"),
        "STATE": (Colors.CYAN, "INFO"),
        "ACTION": (Colors.GREEN, "INFO"),
        "TRACE": (Colors.BLUE, "VERBOSE"),
        "WARN": (Colors.YELLOW, "WARN"),
        "FAIL": (Colors.RED, "ERROR"),
    }

    # ===========================================================
    # Filtering & Formatting
    # ===========================================================

    @staticmethod
    def enabled_for(category: str, tag: str) -> bool:
        """True if a message with this tag and category would be printed."""
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        _, level = DebugLogger.TAGS[tag]
        # Warnings and failures bypass the category switches
        if level in ("INFO", "VERBOSE") and not LoggerConfig.CATEGORIES.get(category, False):
            return False
        limit = DebugLogger.LEVEL_VALUES.get(LoggerConfig.LOG_LEVEL, 3)
        return DebugLogger.LEVEL_VALUES[level] <= limit

    @staticmethod
    def _caller(depth: int = 3) -> str:
        """Name of the class (or CamelCased module) that called a log method."""
        try:
            frame = sys._getframe(depth)
        except ValueError:
            return "Unknown"

        owner = frame.f_locals.get("self")
        if owner is not None:
            return type(owner).__name__
        cls = frame.f_locals.get("cls")
        if isinstance(cls, type):
            return cls.__name__

        module = frame.f_globals.get("__name__", "unknown").rsplit(".", 1)[-1]
        return "".join(part.capitalize() for part in module.split("_"))

    @staticmethod
    def format_line(tag: str, message: str, source: str, now: datetime = None) -> str:
        color, _ = DebugLogger.TAGS[tag]
        parts = []
        if LoggerConfig.SHOW_TIMESTAMP:
            parts.append(f"[{(now or datetime.now()).strftime('%H:%M:%S')}] ")
        if LoggerConfig.SHOW_SOURCE:
            parts.append(f"[{source}]")
        parts.append(f"[{tag}] ")
        return f"{color}{''.join(parts)}{message}{Colors.RESET}"

    @staticmethod
    def _emit(tag: str, message: str, category: str):
        if not DebugLogger.enabled_for(category, tag):
            return
        print(DebugLogger.format_line(tag, message, DebugLogger._caller()))

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @staticmethod
    def init(msg: str = "", category: str = "system"):
        """Startup message. An empty message prints a spacer line."""
        if not msg.strip():
            if LoggerConfig.ENABLE_LOGGING:
                print()
            return
        DebugLogger._emit("INIT", msg, category)

    @staticmethod
    def system(msg: str, category: str = "system"):
        DebugLogger._emit("SYSTEM", msg, category)

    @staticmethod
    def state(msg: str, category: str = "game_state"):
        DebugLogger._emit("STATE", msg, category)

    @staticmethod
    def action(msg: str, category: str = "system"):
        DebugLogger._emit("ACTION", msg, category)

    @staticmethod
    def trace(msg: str, category: str = "collision"):
        """High-volume detail, shown only at VERBOSE."""
        DebugLogger._emit("TRACE", msg, category)

    @staticmethod
    def warn(msg: str, category: str = "system"):
        DebugLogger._emit("WARN", msg, category)

    @staticmethod
    def fail(msg: str, category: str = "system"):
        DebugLogger._emit("FAIL", msg, category)

    # ===========================================================
    # Startup Report
    # ===========================================================

    @staticmethod
    def section(title: str):
        """Boxed section header."""
        if not LoggerConfig.ENABLE_LOGGING:
            return
        rule = "─" * DebugLogger.LINE_LENGTH
        print(f"\n{Colors.WHITE}{rule}\n{f'[{title}]'.center(DebugLogger.LINE_LENGTH)}{Colors.RESET}\n")

    @staticmethod
    def init_entry(module: str, status: str = "OK"):
        """Dotted status row, e.g. ``> AdBroker [none] ........ [OK]``."""
        if not LoggerConfig.ENABLE_LOGGING:
            return
        print(DebugLogger.render_entry(module, status))

    @staticmethod
    def init_sub(detail: str, level: int = 1):
        if not LoggerConfig.ENABLE_LOGGING:
            return
        print(f"{' ' * (level * 4)}• {Colors.WHITE}{detail}{Colors.RESET}")

    @staticmethod
    def render_entry(module: str, status: str) -> str:
        status_color = {
            "OK": Colors.GREEN,
            "LOADING": Colors.CYAN,
            "FAIL": Colors.RED,
        }.get(status.upper(), Colors.WHITE)

        label = f"> {module}"
        badge = f"[{status}]"
        pad = max(30 - len(label), 1)
        dots = max(DebugLogger.LINE_LENGTH - len(label) - pad - 1 - len(badge), 1)
        return f"{Colors.WHITE}{label}{' ' * pad}{'.' * dots} {status_color}{badge}{Colors.RESET}"
