import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

def configure_logging(level: str = "INFO", root_name: str = "ironshop") -> logging.Logger:
    root = logging.getLogger(root_name)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # reconfiguring (tests, reload) must not stack handlers
    root.handlers.clear()
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(console)
    root.propagate = False
    return root
