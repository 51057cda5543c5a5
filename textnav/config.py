import json
import logging
import os

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.expanduser("~/.textnav_config.json")

MAX_HISTORY = 50

COLOR_THEMES = ("default", "night")

DEFAULT_CONFIG = {
    "SCROLL_STEP": 5,
    "TIMEOUT": 30,
    "USER_AGENT": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "BOOKMARKS_FILE": "bookmarks.json",
    "COLOR_THEME": "default",
    "WRAP_WIDTH": 100,
    "SAFE_MODE": True,
    "LOG_FILE": None,
}


def load_config(path=None):
    path = path or CONFIG_FILE
    if not os.path.exists(path):
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return DEFAULT_CONFIG.copy()

    cfg = DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        return cfg
    for k in DEFAULT_CONFIG:
        if k in data:
            cfg[k] = data[k]
    return cfg


def save_config(cfg, path=None):
    path = path or CONFIG_FILE
    data = {k: cfg.get(k, v) for k, v in DEFAULT_CONFIG.items()}
    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        logger.warning("could not save config %s: %s", path, e)
